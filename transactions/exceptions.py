from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import APIException


class EmptyCartException(APIException):
    status_code = 400
    default_detail = _('Cart is empty')
    default_code = 'empty_cart'


class InvalidDeliveryTypeException(APIException):
    status_code = 400
    default_detail = _('Selected delivery option is not available')
    default_code = 'invalid_delivery_type'


class OrderPlacementFailedException(APIException):
    """
    The order could not be stored; nothing was written.
    """
    status_code = 500
    default_detail = _('Order could not be placed. Please try again.')
    default_code = 'order_placement_failed'


class DeliveryTypeInUseException(APIException):
    status_code = 400
    default_detail = _('Delivery type is used by existing orders and cannot be deleted.')
    default_code = 'delivery_type_in_use'
