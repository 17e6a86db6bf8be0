from __future__ import annotations

import uvicorn

from app.config import load_config_from_env
from app.infrastructure.db.mongo import MongoDatabase
from app.infrastructure.db.mongo import load_config_from_env as load_mongo_config
from app.logging_setup import setup_logging
from app.presentation.http.application import create_app

config = load_config_from_env()
setup_logging(config.log_level)

app = create_app(MongoDatabase(load_mongo_config()))


if __name__ == "__main__":
    # Для reload нужно указывать строку "main:app",
    # иначе uvicorn не сможет отслеживать изменения в файлах
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.reload,
        log_config=None,
    )
