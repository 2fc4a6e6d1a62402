import base64
import warnings

from django.contrib.auth import get_user_model
from django.contrib.auth.hashers import check_password, identify_hasher, make_password
from django.test import SimpleTestCase, TestCase

from authentication.core.passwords import (
    SaltedPBKDF2PasswordHasher,
    hash_password,
    split_salted_hash,
    verify_password,
)


class PasswordHashingTests(SimpleTestCase):
    def test_verify_accepts_the_hashed_password(self):
        stored = hash_password("correct horse battery")
        self.assertTrue(verify_password("correct horse battery", stored))

    def test_verify_rejects_a_wrong_password(self):
        stored = hash_password("correct horse battery")
        self.assertFalse(verify_password("correct horse battery!", stored))
        self.assertFalse(verify_password("", stored))

    def test_same_password_hashes_differently_each_time(self):
        first = hash_password("s3cret-pass")
        second = hash_password("s3cret-pass")
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("s3cret-pass", first))
        self.assertTrue(verify_password("s3cret-pass", second))

    def test_stored_value_is_salt_and_key(self):
        salt, key = split_salted_hash(hash_password("s3cret-pass"))
        self.assertEqual(len(salt), 16)
        self.assertEqual(len(key), 32)

    def test_malformed_hashes_verify_false(self):
        valid = hash_password("s3cret-pass")
        salt_part = valid.split(":")[0]
        malformed = [
            "",
            "no-separator",
            "a:b:c",
            f"{salt_part}:",
            f":{salt_part}",
            "!!!not-base64!!!:also-not",
            None,
            12345,
        ]
        for stored in malformed:
            with self.subTest(stored=stored):
                self.assertFalse(verify_password("s3cret-pass", stored))

    def test_non_string_password_verifies_false(self):
        self.assertFalse(verify_password(None, hash_password("s3cret-pass")))

    def test_known_salt_gives_reproducible_key(self):
        salt = b"\x01" * 16
        self.assertEqual(hash_password("abc12345", salt=salt), hash_password("abc12345", salt=salt))
        self.assertTrue(hash_password("abc12345", salt=salt).startswith(base64.b64encode(salt).decode()))


class DjangoHasherIntegrationTests(TestCase):
    def test_make_password_uses_salted_pbkdf2(self):
        encoded = make_password("s3cret-pass")
        self.assertTrue(encoded.startswith("salted_pbkdf2$"))
        self.assertIsInstance(identify_hasher(encoded), SaltedPBKDF2PasswordHasher)
        self.assertTrue(check_password("s3cret-pass", encoded))
        self.assertFalse(check_password("wrong-pass", encoded))

    def test_user_password_round_trip(self):
        User = get_user_model()
        user = User.objects.create_user(
            email="hash@test.com", password="s3cret-pass", first_name="Hash", last_name="User"
        )
        user.refresh_from_db()
        self.assertTrue(user.password.startswith("salted_pbkdf2$"))
        self.assertTrue(user.check_password("s3cret-pass"))
        self.assertFalse(user.check_password("other-pass"))

    def test_hasher_rejects_malformed_encoded_value(self):
        hasher = SaltedPBKDF2PasswordHasher()
        self.assertFalse(hasher.verify("s3cret-pass", "salted_pbkdf2$garbage"))
        self.assertFalse(hasher.verify("s3cret-pass", "pbkdf2_sha256$1$abc$def"))

    def test_wrong_password_check_emits_no_warnings(self):
        encoded = make_password("s3cret-pass")
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            self.assertFalse(check_password("wrong-pass", encoded))
        self.assertEqual(caught, [])
