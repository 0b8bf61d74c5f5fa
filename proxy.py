"""Entry point: ``uvicorn proxy:app`` or ``python proxy.py``."""

from groq_proxy.config_loader import ProxySettings, load_config
from groq_proxy.logging import setup_logging
from groq_proxy.main import create_app

config = load_config()
settings = ProxySettings.from_config(config)
logger = setup_logging(settings.log_level)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    logger.info("Groq proxy starting on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
