from __future__ import annotations


class TextFileReader:
    """
    Назначение/ответственность:
        Читает CSV с диска целиком (utf-8, BOM допускается).
    """

    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self.encoding = encoding

    def read_text(self, path: str) -> str:
        with open(path, "r", encoding=self.encoding, newline="") as f:
            return f.read()
