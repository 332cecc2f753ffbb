"""File name conventions and defaults."""

from __future__ import annotations

ENV_PLACEHOLDER = "${env}"
DEFAULT_FILENAME = ".env.${env}.json"

JSON_SUFFIX = ".json"
MODULE_SUFFIX = ".py"
# Leading marker of dotenv file names (.env, .env.production, ...)
DOTENV_MARKER = ".env"

# Attribute on the cache holder that stores the merged config
CACHE_FIELD = "enx"
# Environment variable naming the active environment
ENV_NAME_VAR = "ENX_ENV"
# Module attribute the Python parser reads
MODULE_EXPORT = "config"

ENV_SEPARATOR = "_"
PATH_SEPARATOR = "."
