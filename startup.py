import os
import sys
import uvicorn
import logging
import traceback

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

# Add the src directory to Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
src_path = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

logger.info("=" * 60)
logger.info("MedScribe Startup")
logger.info("=" * 60)
logger.info(f"Python version: {sys.version.split()[0]}")
logger.info(f"Source path: {src_path}")

# Log configuration presence only, never values
logger.info("Environment Configuration:")
logger.info(f"  PORT: {os.environ.get('PORT', '8000')}")
logger.info(f"  APP_ENV: {os.environ.get('APP_ENV', 'not set')}")
logger.info(f"  STORAGE_BACKEND: {os.environ.get('STORAGE_BACKEND', 'file')}")
logger.info(f"  MONGO_URI: {'✅ set' if os.environ.get('MONGO_URI') else '❌ not set'}")

if __name__ == "__main__":
    try:
        from medscribe.core.config import get_settings
        settings = get_settings()
        port = int(os.environ.get("PORT", settings.port))
        host = os.environ.get("HOST", settings.host)

        logger.info(f"  App name: {settings.app_name}")
        logger.info(f"  App version: {settings.app_version}")
        logger.info(f"  App environment: {settings.app_env}")
        logger.info(f"Starting uvicorn server on {host}:{port}...")
        uvicorn.run(
            "medscribe.app:app",
            host=host,
            port=port,
            workers=1,
            log_level=settings.logging.level.lower(),
            access_log=True,
            timeout_keep_alive=75,
            timeout_graceful_shutdown=30,
        )
    except KeyboardInterrupt:
        logger.info("⚠️  Shutting down due to keyboard interrupt")
        sys.exit(0)
    except Exception as e:
        logger.error("❌ CRITICAL: Failed to start application")
        logger.error(f"Error: {e}")
        logger.error(f"Error type: {type(e).__name__}")
        logger.error(traceback.format_exc())
        sys.exit(1)
