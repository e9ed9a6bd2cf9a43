from __future__ import annotations

import os
import sys
from pathlib import Path

import uvicorn


def main(host: str | None = None, port: int | None = None):
    root = Path(__file__).resolve().parent.parent
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    uvicorn.run(
        "app.main:app",
        host=host or os.getenv("HOST", "127.0.0.1"),
        port=port or int(os.getenv("PORT", "3002")),
        reload=False,
    )


if __name__ == "__main__":
    main()
