import sys
import os
import logging
from pathlib import Path

# Add the src directory to the Python path
src_path = os.path.join(os.path.dirname(__file__), 'src')
if (src_path not in sys.path):
    sys.path.insert(0, src_path)

from firefly import Firefly, PathConfig, Tasks
from firefly.logger import setup_logger

# Optional: Enable detailed logging
setup_logger(logging.DEBUG)

# Load settings from firefly.yml (or specified path)
config = PathConfig()
# config = PathConfig(filename="path/to/your/firefly.yml")

firefly = Firefly.from_config(config)

# A previous `firefly.export_credentials()` saved to credentials.json
firefly.import_credentials(Path("credentials.json").read_text(encoding="utf8"))

print("Fetching tasks...")

for task in Tasks(firefly):
    print("Task:", task.title)
    for key, value in vars(task).items():
        if key != "raw":
            print(f"{key}: {value}")
    print("---------------")

print("\nDone.")
