import logging
import uvicorn
from app.core import config

log = logging.getLogger("serve")

def main():
    """Serve the API with uvicorn; HOST/PORT come from the environment."""
    log.info("Starting Writer Assistant on %s:%d", config.HOST, config.PORT)
    uvicorn.run("app.main:app", host=config.HOST, port=config.PORT)

if __name__ == "__main__":
    main()
