import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # CSRF Configuration
    WTF_CSRF_ENABLED = True
    WTF_CSRF_CHECK_DEFAULT = True
    WTF_CSRF_TIME_LIMIT = 3600  # 1 hour

    # Database - SQLite file in the instance folder for local development
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///bakeshop.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Upload Configuration
    UPLOAD_FOLDER = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'uploads')
    MAX_CONTENT_LENGTH = 50 * 1024 * 1024  # 50MB, banners may be videos
    ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}
    ALLOWED_VIDEO_EXTENSIONS = {'mp4', 'webm', 'mov'}

    # Media storage: local, cloudinary or s3
    MEDIA_BACKEND = os.environ.get('MEDIA_BACKEND', 'local')
    CLOUDINARY_CLOUD_NAME = os.environ.get('CLOUDINARY_CLOUD_NAME')
    CLOUDINARY_UPLOAD_PRESET = os.environ.get('CLOUDINARY_UPLOAD_PRESET', 'bakery_uploads')
    CLOUDINARY_API_KEY = os.environ.get('CLOUDINARY_API_KEY')
    CLOUDINARY_API_SECRET = os.environ.get('CLOUDINARY_API_SECRET')
    S3_BUCKET = os.environ.get('S3_BUCKET')
    AWS_REGION = os.environ.get('AWS_REGION', 'us-east-1')

    # Order notification webhook
    ORDER_WEBHOOK_URL = os.environ.get('ORDER_WEBHOOK_URL')
    ORDER_WEBHOOK_TIMEOUT = float(os.environ.get('ORDER_WEBHOOK_TIMEOUT', 10))
    CURRENCY = os.environ.get('CURRENCY', 'BDT')

    # Homepage banner carousel (seconds)
    CAROUSEL_INTERVAL = 10
    CAROUSEL_TRANSITION = 0.5

    # API bearer tokens
    API_TOKEN_MAX_AGE = 24 * 3600

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Pagination
    ITEMS_PER_PAGE = 12


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    SQLALCHEMY_ECHO = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    WTF_CSRF_ENABLED = False
    MEDIA_BACKEND = 'local'
    ORDER_WEBHOOK_URL = 'https://hooks.example.test/orders'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
