from app.services.auth import AuthService
from app.services.content_assistant import ContentAssistant
from app.services.media import MediaService

__all__ = ["AuthService", "ContentAssistant", "MediaService"]
