import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Application configuration"""

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # API server settings
    API_HOST = os.getenv('API_HOST', '0.0.0.0')
    API_PORT = int(os.getenv('API_PORT', '8000'))
    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', '*').split(',') if o.strip()]

    # Settlement settings
    DEFAULT_TRANSFER_MODE = os.getenv('DEFAULT_TRANSFER_MODE', 'optimal')
    CURRENCY_SYMBOL = os.getenv('CURRENCY_SYMBOL', '€')

    # Application settings
    MAX_PARTICIPANTS = int(os.getenv('MAX_PARTICIPANTS', '50'))
