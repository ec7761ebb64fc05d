from marketplace.infrastructure.notifications.fcm_push import FcmPushSender
from marketplace.infrastructure.notifications.smtp_email import SmtpEmailSender
from marketplace.infrastructure.notifications.redis_realtime import RedisRealtimePublisher

__all__ = ["FcmPushSender", "SmtpEmailSender", "RedisRealtimePublisher"]
