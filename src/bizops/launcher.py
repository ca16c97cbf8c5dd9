"""Launcher for `python -m bizops`.

Delegates to the bootstrap (`create_application`), signs in the identity
taken from ``BIZOPS_USER_ID`` / ``BIZOPS_USER_EMAIL`` and opens the dashboard.
"""

from __future__ import annotations

import os
import sys

from bizops import settings
from bizops.app.bootstrap import configure_logging, create_application
from bizops.main_window import MainWindow
from bizops.services.tour_completion_store import UserIdentity


def main():  # pragma: no cover - runtime
    configure_logging()
    ctx = create_application(data_dir=settings.DATA_DIR)
    identity = UserIdentity(
        user_id=os.environ.get("BIZOPS_USER_ID") or None,
        email=os.environ.get("BIZOPS_USER_EMAIL", "demo@bizops.local"),
    )
    win = MainWindow(ctx.provider)
    ctx.provider.set_identity(identity)
    win.show()
    win.show_page("/dashboard")
    sys.exit(ctx.qt_app.exec())


if __name__ == "__main__":  # pragma: no cover
    main()
