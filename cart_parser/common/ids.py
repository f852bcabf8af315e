from __future__ import annotations

import uuid


def generate_run_id() -> str:
    """
    Назначение:
        Сгенерировать run_id для запуска команды.
    """
    return str(uuid.uuid4())


def generate_item_id() -> str:
    """
    Назначение:
        Сгенерировать непрозрачный уникальный id позиции корзины.
    """
    return str(uuid.uuid4())
