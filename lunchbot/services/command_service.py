# lunchbot/services/command_service.py

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List
from urllib.parse import unquote_plus

from lunchbot.core.errors import InvalidSubCommand, MalformedForm
from lunchbot.services.restaurant_service import Restaurant, RestaurantStore

logger = logging.getLogger(__name__)

# A '%' not followed by two hex digits.
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


# --- REQUEST PARSING ---

def _unescape(raw: str) -> str:
    match = _BAD_ESCAPE.search(raw)
    if match:
        raise MalformedForm(f'invalid URL escape "{raw[match.start():match.start() + 3]}"')
    try:
        return unquote_plus(raw, errors="strict")
    except UnicodeDecodeError as e:
        raise MalformedForm(f"invalid UTF-8 in form value: {e}") from e


def parse_form(body: str) -> Dict[str, List[str]]:
    """
    Parses a URL-encoded form body the way Slack sends slash commands.
    Fields without '=' get an empty value; repeated fields keep every value.
    """
    form: Dict[str, List[str]] = {}
    for pair in body.split("&"):
        if not pair:
            continue
        if ";" in pair:
            raise MalformedForm("invalid semicolon separator in query")
        key, _, value = pair.partition("=")
        form.setdefault(_unescape(key), []).append(_unescape(value))
    return form


def form_value(form: Dict[str, List[str]], key: str) -> str:
    """First value of a form field, or an empty string when it is missing."""
    values = form.get(key)
    return values[0] if values else ""


@dataclass(frozen=True)
class Parameter:
    sub_command: str = ""
    value: str = ""

    @classmethod
    def parse(cls, text: str) -> "Parameter":
        """Splits the command text on its first space: 'add Sushi Place' -> ('add', 'Sushi Place')."""
        text = text.strip()
        if not text:
            return cls()
        sub_command, _, value = text.partition(" ")
        return cls(sub_command=sub_command, value=value)


# --- RESPONSE RENDERING ---

def render_restaurants(restaurants: Iterable[Restaurant]) -> str:
    return "".join(f"[{r.id}] {r.name}\n" for r in restaurants)


# --- DISPATCH ---

def run_command(parameter: Parameter, store: RestaurantStore) -> str:
    """Runs one sub-command against the store and returns the response text."""
    if parameter.sub_command == "add":
        store.add(parameter.value)
        return parameter.value

    if parameter.sub_command == "list":
        return render_restaurants(store.list_recent())

    logger.info("Unknown sub-command %r", parameter.sub_command)
    raise InvalidSubCommand()
