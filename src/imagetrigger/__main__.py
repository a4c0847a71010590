from __future__ import annotations

from imagetrigger.ui.cli import run

run()
