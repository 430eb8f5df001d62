import os


class Settings:
    brewery_api_url = os.getenv("BREWERY_API_URL", "http://localhost:5089").rstrip("/")
    jwt_secret_key = os.getenv("JWT_SECRET_KEY", "secret")
    jwt_algorithm = os.getenv("JWT_ALGORITHM", "HS256")
    port = int(os.getenv("PORT", "3008"))
    allow_origins = [origin.strip() for origin in os.getenv("ALLOW_ORIGINS", "*").split(",") if origin.strip()]
    log_level = os.getenv("LOG_LEVEL", "INFO")
    logstash_host = os.getenv("LOGSTASH_HOST")
    logstash_port = int(os.getenv("LOGSTASH_PORT", "5000"))


settings = Settings()
