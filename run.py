"""Start the MusicFlow API with uvicorn."""
import uvicorn

from musicflow.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "musicflow.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
