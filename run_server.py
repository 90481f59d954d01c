"""Flask server that stays alive"""

import os
import sys

from planterbox import create_app


def main() -> None:
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")

    app = create_app()

    # Get host/port from environment or use defaults
    host = os.environ.get("PLANTERBOX_HOST", "0.0.0.0")
    port = int(os.environ.get("PLANTERBOX_PORT", os.environ.get("FLASK_RUN_PORT", 8000)))

    print(f"Server starting on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")

    try:
        app.run(host=host, port=port, debug=False, use_reloader=False, threaded=True)
    except KeyboardInterrupt:
        print("\nServer stopped by user")


if __name__ == "__main__":
    main()
