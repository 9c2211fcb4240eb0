"""
Container entrypoint example.

Resolves seeds before Cassandra starts and exports them as
CASSANDRA_SEEDS for the stock docker-entrypoint.sh. Exits 1 without
starting Cassandra when the fallback seeds are misconfigured.

Run with:
    python examples/entrypoint.py cassandra -f
"""

import os
import sys

from seedprovider import configure_logging, get_logger, get_seeds, load_settings

logger = get_logger("example.entrypoint")


def main() -> None:
    configure_logging(level=os.getenv("SEEDPROVIDER_LOG_LEVEL", "INFO"))

    settings = load_settings()
    seeds = get_seeds(settings)

    if seeds:
        os.environ["CASSANDRA_SEEDS"] = ",".join(str(seed) for seed in seeds)
        logger.info("Starting with seeds %s", os.environ["CASSANDRA_SEEDS"])
    else:
        logger.info("No peers found, starting as the first node")

    command = sys.argv[1:] or ["docker-entrypoint.sh", "cassandra", "-f"]
    os.execvp(command[0], command)


if __name__ == "__main__":
    main()
