"""
INFRASTRUCTURE LAYER - Adapters for the ports defined in the domain

- persistence: Prisma repositories and unit of work
- notifications: push (FCM), email (SMTP), real-time (Redis pub/sub)
- cache: Redis client factory
"""
