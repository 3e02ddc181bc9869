"""
Live smoke test against a real Firefly portal.

Reads firefly.yml when present, otherwise FIREFLY_* environment variables (a .env file is
honoured). Set FIREFLY_XML (or `xml:` in firefly.yml) to the token obtained by opening the
printed login URL; FIREFLY_CREDENTIALS may point to a file with a previous export instead.
"""
import logging
import os
import sys
from datetime import datetime, timedelta
from pathlib import Path

from dotenv import load_dotenv

# Add the src directory to the Python path
src_path = os.path.join(os.path.dirname(__file__), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from firefly import (
    EnvConfig,
    Firefly,
    FireflyException,
    PathConfig,
    PortalClient,
    get_host,
)
from firefly.logger import setup_logger

# --- Configuration ---
ENABLE_DEBUG_LOGGING = False
CONFIG_FILE = Path.cwd() / "firefly.yml"
MAX_ITEMS_TO_PRINT = 5
# --- End Configuration ---

setup_logger(logging.DEBUG if ENABLE_DEBUG_LOGGING else logging.INFO)
logger = logging.getLogger(__name__)

test_results_summary = []


def run_feature_test(feature_name, test_func):
    """Run one check, record PASSED/FAILED, never let it stop the run."""
    print(f"\n--- Testing: {feature_name} ---")
    success = False
    try:
        test_func()
        success = True
    except FireflyException as e:
        logger.error(f"Firefly error testing {feature_name}: {e!r}", exc_info=ENABLE_DEBUG_LOGGING)
    except Exception as e:
        logger.error(f"Unexpected error testing {feature_name}: {e!r}", exc_info=ENABLE_DEBUG_LOGGING)
    test_results_summary.append({"name": feature_name, "status": "PASSED" if success else "FAILED"})
    return success


def print_items(items):
    items = list(items)
    print(f"Found {len(items)}")
    for item in items[:MAX_ITEMS_TO_PRINT]:
        print(f"- {item}")
    if len(items) > MAX_ITEMS_TO_PRINT:
        print("... (truncated)")


if __name__ == "__main__":
    load_dotenv()
    config = PathConfig(filename=CONFIG_FILE) if CONFIG_FILE.exists() else EnvConfig()
    xml = (config.other_info or {}).get("xml") or os.getenv("FIREFLY_XML")
    saved_credentials = os.getenv("FIREFLY_CREDENTIALS")

    if config.school_code:
        run_feature_test("School lookup", lambda: print(get_host(config.school_code)))

    try:
        firefly = Firefly.from_config(config)
    except FireflyException as e:
        print(f"!!! CRITICAL ERROR: {e}")
        sys.exit(1)

    if not firefly.device_id:
        firefly.set_device_id()
    client = PortalClient(firefly)

    run_feature_test("API version", lambda: print("API version", client.api_version))
    print("Authenticating via", firefly.authenticate())

    if saved_credentials:
        firefly.import_credentials(Path(saved_credentials).read_text(encoding="utf8"))
        if firefly.device_id is None:
            firefly.set_device_id(config.device_id)
    elif xml:
        firefly.complete_authentication(xml)
    else:
        print("No token given, open the URL above and set FIREFLY_XML to the token it returns.")
        sys.exit(0)

    run_feature_test("Verify credentials", lambda: print("Credentials are valid:", client.verify_credentials()))

    start = datetime.now()
    run_feature_test("Events (next 7 days)", lambda: print_items(client.get_events(start, start + timedelta(days=7))))
    run_feature_test("Messages", lambda: print_items(client.messages))
    run_feature_test("Bookmarks", lambda: print_items(client.bookmarks))
    run_feature_test("Groups", lambda: print_items(client.groups))
    run_feature_test("Classes", lambda: print_items(client.classes))
    run_feature_test("Tasks", lambda: print_items(client.get_tasks()))

    print("\n--- Test Summary ---")
    for result in test_results_summary:
        print(f"- {result['name']}: {result['status']}")
    failed = sum(result["status"] == "FAILED" for result in test_results_summary)
    print(f"\nTotal PASSED: {len(test_results_summary) - failed}, FAILED: {failed}")
