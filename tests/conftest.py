from __future__ import annotations

import os

os.environ.setdefault("PAGE_SYNC_DISABLE_CONSOLE", "1")
