from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import APIException


class LastAdministratorException(APIException):
    """
    Raised when an operation would leave the store without any administrator.
    """
    status_code = 400
    default_detail = _('The last administrator account cannot be removed or demoted.')
    default_code = 'last_administrator'


class UserHasOrdersException(APIException):
    status_code = 400
    default_detail = _('Users with orders cannot be deleted.')
    default_code = 'user_has_orders'
