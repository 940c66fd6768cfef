"""balenaFin QC sequence"""
from .test_definition import TITLE, TESTS, SKIP, PARAMETERS  # noqa: F401
from .limits import LIMITS  # noqa: F401

from .eeprom import Eeprom  # noqa: F401
from .wifi import Wifi  # noqa: F401
from .bluetooth import Bluetooth  # noqa: F401
from .ethernet import Ethernet  # noqa: F401
from .i2c import I2c  # noqa: F401
from .spi import Spi  # noqa: F401
from .camera import Camera  # noqa: F401
from .display import Display  # noqa: F401
from .usb import Usb  # noqa: F401
from .gpio import Gpio  # noqa: F401
from .hdmi import Hdmi  # noqa: F401
from .rtc import Rtc  # noqa: F401
from .rgb import Rgb  # noqa: F401
from .coprocessor import Coprocessor  # noqa: F401
from .power import Power  # noqa: F401
