from __future__ import annotations

from bakery_pos.bootstrap import build_app

app = build_app()
