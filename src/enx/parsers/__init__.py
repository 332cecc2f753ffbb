"""Config file parsers: JSON, dotenv and Python modules."""

from enx.parsers.base import ParseOptions, Parser
from enx.parsers.dotenv_file import parse_dotenv_file, parse_dotenv_text, parse_dotenv_value
from enx.parsers.json_file import parse_json_file
from enx.parsers.module_file import parse_module_file

__all__ = [
    "ParseOptions",
    "Parser",
    "parse_dotenv_file",
    "parse_dotenv_text",
    "parse_dotenv_value",
    "parse_json_file",
    "parse_module_file",
]
