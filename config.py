from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    SUPABASE_URL: str
    SUPABASE_SERVICE_ROLE_KEY: str
    SUPABASE_ANON_KEY: str = ""

    HOST: str = "0.0.0.0"
    PORT: int = 3001
    CLIENT_URL: str = "http://localhost:5173"
    ENVIRONMENT: str = "production"
    STATIC_DIR: str = "dist"
    LOG_LEVEL: str = "INFO"
    MAX_BODY_SIZE_MB: int = 10

    # 이미 가입된 이메일이거나 세션이 없을 때 바로 로그인 시도
    AUTO_LOGIN_ON_REGISTER: bool = True

    model_config = SettingsConfigDict(env_file=".env")

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def auth_key(self) -> str:
        return self.SUPABASE_ANON_KEY or self.SUPABASE_SERVICE_ROLE_KEY


settings = Settings()
