from __future__ import annotations

from typing import Protocol


class TextSource(Protocol):
    """
    Назначение/ответственность:
        Источник сырого текста CSV по пути.
    """

    def read_text(self, path: str) -> str:
        """
        Контракт:
            Возвращает содержимое файла целиком.
            Ошибки чтения (файл не найден и т.п.) пробрасываются как OSError без обёртки.
        """
        ...
