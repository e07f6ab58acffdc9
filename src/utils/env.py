# src/utils/env.py
from dotenv import load_dotenv
from pathlib import Path
import os

def load_env():
    """
    Load environment variables from a .env file (when present)
    and return the settings the pipeline cares about.
    """
    dotenv_path = Path(".") / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path)
        print("[INFO] Loaded .env file.")
    else:
        print("[INFO] No .env file found, using system environment.")

    return {
        "ENV": os.getenv("ENV", "local"),
        "SEED": int(os.getenv("SEED", 123)),
        "EXPERIMENT_NAME": os.getenv("EXPERIMENT_NAME", "boston-housing"),
        "MLFLOW_TRACKING_URI": os.getenv("MLFLOW_TRACKING_URI"),
    }
