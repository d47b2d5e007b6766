# =============================================================================
# run.py — Starts the function host (FastAPI) then the playground (Streamlit)
# =============================================================================
# Usage: python run.py
# Backend: http://127.0.0.1:8000
# UI: http://127.0.0.1:8501
# =============================================================================

import os
import subprocess
import sys
import time

import httpx

BACKEND_HOST = "127.0.0.1"
BACKEND_PORT = 8000
STREAMLIT_PORT = 8501

ROOT = os.path.dirname(os.path.abspath(__file__))


def wait_for_backend(url: str, timeout: float = 30.0) -> bool:
    print(f"Waiting for backend at {url}...", end="", flush=True)
    start = time.monotonic()
    while time.monotonic() - start < timeout:
        try:
            if httpx.get(f"{url}/health", timeout=2).status_code == 200:
                print(" Ready!")
                return True
        except httpx.HTTPError:
            pass
        print(".", end="", flush=True)
        time.sleep(1)
    print(" Timeout.")
    return False


def main() -> int:
    backend_url = f"http://{BACKEND_HOST}:{BACKEND_PORT}"
    env = os.environ.copy()
    env["BACKEND_URL"] = backend_url

    print(f"Starting backend on {backend_url}...")
    backend_proc = subprocess.Popen(
        [
            sys.executable, "-m", "uvicorn", "glide_functions.main:app",
            "--host", BACKEND_HOST,
            "--port", str(BACKEND_PORT),
        ],
        cwd=ROOT,
        env=env,
    )
    try:
        if not wait_for_backend(backend_url):
            print("Backend failed to start within timeout.")
            return 1
        print(f"Starting playground on http://127.0.0.1:{STREAMLIT_PORT}...")
        subprocess.run(
            [
                sys.executable, "-m", "streamlit", "run", "streamlit_app.py",
                "--server.port", str(STREAMLIT_PORT),
                "--server.address", "127.0.0.1",
                "--browser.gatherUsageStats", "false",
            ],
            cwd=ROOT,
            env=env,
        )
    except KeyboardInterrupt:
        print("\nShutting down...")
    finally:
        backend_proc.terminate()
        backend_proc.wait(timeout=5)
    return 0


if __name__ == "__main__":
    sys.exit(main())
