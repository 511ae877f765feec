import logging
from contextlib import asynccontextmanager
from pathlib import Path
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .routers import (
    visitors,
    posts,
    blogs,
    categories,
    forum,
    subscribe,
    skins,
    profile,
    search,
    upload,
)
from .config import get_settings, clear_settings_cache
from .database import Base, SessionLocal, engine
from .redis_client import close_redis

# Configurar logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Cargar variables de entorno desde .env (solo en desarrollo local)
backend_dir = Path(__file__).parent.parent
env_path = backend_dir / ".env"
loaded = load_dotenv(dotenv_path=env_path)
if loaded:
    logger.info(f"Variables de entorno cargadas desde: {env_path}")
else:
    logger.warning(f"No se pudo cargar archivo .env desde: {env_path}")

# Limpiar cache de settings para asegurar que se recarguen las variables
clear_settings_cache()

# Importar todos los modelos para que SQLAlchemy los registre antes de create_all()
from . import models  # noqa: F401,E402

app_settings = get_settings()
logger.info(f"Entorno: {app_settings.environment}")


def create_tables():
    """Crea las tablas en la base de datos si no existen y la skin por defecto."""
    try:
        logger.info("Creando tablas en la base de datos...")
        expected_tables = list(Base.metadata.tables.keys())
        logger.info(f"Tablas esperadas: {', '.join(expected_tables)}")

        Base.metadata.create_all(bind=engine)

        db = SessionLocal()
        try:
            skins.ensure_default_skin(db)
        finally:
            db.close()

        logger.info("✅ Todas las tablas fueron creadas/verificadas exitosamente")
    except Exception as e:
        logger.error(f"❌ ERROR al crear tablas: {str(e)}", exc_info=True)
        raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Crear tablas al iniciar (no bloquear el inicio si falla)
    try:
        create_tables()
    except Exception as e:
        logger.error(f"❌ Error al crear tablas al iniciar: {str(e)}", exc_info=True)
        logger.warning("⚠️ El servidor continuará iniciando, pero algunas funcionalidades pueden no estar disponibles")
    yield
    close_redis()


app = FastAPI(title=app_settings.app_name, version="0.1.0", redirect_slashes=False, lifespan=lifespan)

# Configurar CORS
allowed_origins = ["http://localhost:3000"]

# FRONTEND_URL admite varios orígenes separados por coma
for origin in (o.strip() for o in app_settings.frontend_url.split(",")):
    if origin and origin not in allowed_origins:
        allowed_origins.append(origin)

logger.info(f"🌐 Orígenes CORS permitidos: {allowed_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(upload.router, prefix="/api")
app.include_router(posts.router, prefix="/api")
app.include_router(categories.router, prefix="/api")
app.include_router(profile.router, prefix="/api")
app.include_router(skins.router, prefix="/api")
app.include_router(search.router, prefix="/api")
app.include_router(blogs.router, prefix="/api")
app.include_router(forum.router, prefix="/api")
app.include_router(subscribe.router, prefix="/api")
app.include_router(visitors.router, prefix="/api")


@app.get("/", tags=["root"])  # Simple welcome endpoint
async def root():
    return {"message": "Bienvenido al backend de Snuggle"}


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok", "environment": app_settings.environment}
