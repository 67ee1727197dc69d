from leaveflow.services.notification.dispatcher import DeliveryReport, NotificationDispatcher
from leaveflow.services.notification.payload import (
    NewLeaveNotification,
    build_new_leave_notification,
    date_range_suffix,
)
from leaveflow.services.notification.push_gateway import (
    FirebasePushGateway,
    LoggingPushGateway,
    MulticastResult,
    PushGateway,
)

__all__ = [
    "DeliveryReport",
    "NotificationDispatcher",
    "NewLeaveNotification",
    "build_new_leave_notification",
    "date_range_suffix",
    "FirebasePushGateway",
    "LoggingPushGateway",
    "MulticastResult",
    "PushGateway",
]
