"""Run the FastAPI application."""

from __future__ import annotations

from pathlib import Path

import hydra
import uvicorn
from hydra.utils import to_absolute_path
from omegaconf import DictConfig

from lapwatch.serve.api import ApiConfig, create_app
from lapwatch.utils.logging import logger, setup_logging


@hydra.main(config_path="../configs", config_name="server", version_base=None)
def main(cfg: DictConfig) -> None:
    log_file = Path(to_absolute_path(cfg.log_file)) if cfg.log_file else None
    setup_logging(log_file, level=cfg.log_level)

    app = create_app(ApiConfig(**cfg.api))
    logger.info("Serving lapwatch on {host}:{port}", host=cfg.host, port=cfg.port)
    uvicorn.run(app, host=cfg.host, port=int(cfg.port), log_level=str(cfg.log_level).lower())


if __name__ == "__main__":
    main()
