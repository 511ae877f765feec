import os

class Settings:
    """Configuración de la aplicación que lee variables de entorno dinámicamente."""

    @property
    def app_name(self) -> str:
        return "Snuggle Backend"

    @property
    def environment(self) -> str:
        # Si hay PORT (hosting) o ENV=production, es producción
        env = os.getenv("ENV", "").lower()
        if env == "production" or os.getenv("PORT"):
            return "production"
        return "development"

    @property
    def frontend_url(self) -> str:
        return os.getenv("FRONTEND_URL", "http://localhost:3000")

    @property
    def database_url(self) -> str:
        return os.getenv("DATABASE_URL", "").strip() or "sqlite:///./snuggle.db"

    # --- Supabase (proveedor de identidad) ---

    @property
    def supabase_url(self) -> str:
        return os.getenv("SUPABASE_URL", "").rstrip("/")

    @property
    def supabase_anon_key(self) -> str:
        return os.getenv("SUPABASE_ANON_KEY", "")

    # --- Cloudflare R2 (almacenamiento compatible con S3) ---

    @property
    def r2_account_id(self) -> str:
        return os.getenv("R2_ACCOUNT_ID", "")

    @property
    def r2_access_key_id(self) -> str:
        return os.getenv("R2_ACCESS_KEY_ID", "")

    @property
    def r2_secret_access_key(self) -> str:
        return os.getenv("R2_SECRET_ACCESS_KEY", "")

    @property
    def r2_bucket_name(self) -> str:
        return os.getenv("R2_BUCKET_NAME", "")

    @property
    def r2_public_url(self) -> str:
        return os.getenv("R2_PUBLIC_URL", "").rstrip("/")

    # --- Redis (contador de visitantes) ---

    @property
    def redis_host(self) -> str:
        return os.getenv("REDIS_HOST", "localhost")

    @property
    def redis_port(self) -> int:
        return int(os.getenv("REDIS_PORT", "6379"))

    @property
    def redis_password(self) -> str | None:
        return os.getenv("REDIS_PASSWORD") or None

# Instancia singleton de Settings (sin cache, lee valores dinámicamente)
_settings_instance = None

def get_settings() -> Settings:
    """Retorna la instancia de Settings. Lee variables de entorno dinámicamente."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance

def clear_settings_cache():
    """Limpia la instancia de settings (aunque no es necesario con propiedades dinámicas)."""
    global _settings_instance
    _settings_instance = None
