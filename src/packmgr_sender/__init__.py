# Load .env vars from file before everything else
from dotenv import load_dotenv

load_dotenv()

from .logger import setup_logging  # noqa: E402

setup_logging()

from .config import PackmgrPath, SenderConfig  # noqa: E402
from .models import BundleStatusSnapshot, DeliveryResult, Target  # noqa: E402
from .sender import Sender  # noqa: E402

__all__ = [
    "BundleStatusSnapshot",
    "DeliveryResult",
    "PackmgrPath",
    "Sender",
    "SenderConfig",
    "Target",
]
