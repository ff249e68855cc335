"""Hammer one stopwatch from many threads and report the lap summary."""

from __future__ import annotations

from pathlib import Path

import hydra
from hydra.utils import to_absolute_path
from omegaconf import DictConfig

from lapwatch.core.registry import StopwatchRegistry
from lapwatch.runtime.race import RaceConfig, RaceRunner
from lapwatch.utils.logging import logger, setup_logging


@hydra.main(config_path="../configs", config_name="race", version_base=None)
def main(cfg: DictConfig) -> None:
    log_file = Path(to_absolute_path(cfg.log_file)) if cfg.log_file else None
    setup_logging(log_file, level=cfg.log_level)

    registry = StopwatchRegistry()
    result = RaceRunner(registry, RaceConfig(**cfg.race)).run()
    for key, value in result.summary.as_dict().items():
        logger.info("{key:>9}: {value:.4f}", key=key, value=value)


if __name__ == "__main__":
    main()
