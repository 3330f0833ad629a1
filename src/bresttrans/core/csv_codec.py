"""
CSV encoding of ridership records.

The layout is fixed and consumed downstream as-is: comma separated, UTF-8,
``\\n`` line endings, no quoting. Values containing commas are written
unescaped.
"""

from typing import Iterable

from .models import TransportRecord

HEADER = (
    "Время",
    "Регистрационный номер",
    "Маршрут",
    "Тип",
    "Текущая",
    "Следующая",
    "Заполненность остановки",
    "Заполненность транспорта",
    "Вошло",
    "Вышло",
    "Широта",
    "Долгота",
    "Погода",
)

SEPARATOR = ","
LINE_END = "\n"
ENCODING = "utf-8"


def encode_row(record: TransportRecord) -> str:
    return SEPARATOR.join(record.as_row()) + LINE_END


def encode(records: Iterable[TransportRecord]) -> str:
    """
    Encode records as CSV text.

    An empty sequence produces the header line only.
    """
    lines = [SEPARATOR.join(HEADER) + LINE_END]
    lines.extend(encode_row(record) for record in records)
    return "".join(lines)


def encode_bytes(records: Iterable[TransportRecord]) -> bytes:
    return encode(records).encode(ENCODING)
