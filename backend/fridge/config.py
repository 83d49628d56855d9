# fridge/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "What's in the Fridge API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # CORS origins for the Angular frontend
    CORS_ORIGINS: list[str] = [
        "http://localhost:4200",
        "http://127.0.0.1:4200",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Google Gemini settings (AI recipe generator)
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    gemini_api_url: str = os.getenv(
        "GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta/models"
    )
    gemini_timeout_sec: float = float(os.getenv("GEMINI_TIMEOUT_SEC", "60"))

    # Pexels image search (decorates AI drafts with a picture); optional
    pexels_api_key: str | None = os.getenv("PEXELS_API_KEY")
    pexels_api_url: str = os.getenv("PEXELS_API_URL", "https://api.pexels.com/v1/search")

    # Uploaded recipe/profile images
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")
    max_upload_mb: int = int(os.getenv("MAX_UPLOAD_MB", "5"))

settings = Settings()  # Instantiate configuration
