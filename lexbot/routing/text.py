"""Message text normalization."""

import re


def mention_regex(bot_name: str, bot_alias: str | None = None) -> re.Pattern[str]:
    """Regex matching a leading ``@name``, ``name:`` or ``name,`` address."""
    names = [re.escape(bot_name)]
    if bot_alias:
        names.append(re.escape(bot_alias))
    return re.compile(
        rf"^\s*@?(?:{'|'.join(names)})(?:[:,]\s*|\s+|$)",
        re.IGNORECASE,
    )


def strip_mention(text: str, bot_name: str, bot_alias: str | None = None) -> str:
    """
    Remove the bot address from the start of ``text`` and trim whitespace.

    >>> strip_mention("@lexbot lex hello", "lexbot")
    'lex hello'
    >>> strip_mention("Lexbot: book a room", "lexbot")
    'book a room'
    """
    return mention_regex(bot_name, bot_alias).sub("", text, count=1).strip()
