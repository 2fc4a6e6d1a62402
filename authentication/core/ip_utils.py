"""
Client IP lookup for request logging.
"""


def get_client_ip(request_meta):
    """
    Return the originating client IP from ``request.META``.

    Behind the reverse proxy the first X-Forwarded-For entry is the client;
    otherwise REMOTE_ADDR is used. Returns an empty string when neither is set.
    """
    forwarded_for = request_meta.get('HTTP_X_FORWARDED_FOR')
    if forwarded_for:
        ip = forwarded_for.split(',')[0].strip()
        if ip:
            return ip

    remote_addr = request_meta.get('REMOTE_ADDR')
    if remote_addr:
        return remote_addr.strip()

    return ""
