"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    PROTOCOL_ERROR = 4


class RestDialects(Enum):
    """PEAR REST dialect tags advertised in channel.xml.

    Args:
        Enum (string): Dialect tags as they appear in ``baseurl/@type``.
    """

    REST13 = "REST1.3"
    REST12 = "REST1.2"
    REST11 = "REST1.1"
    REST10 = "REST1.0"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    # Highest priority first
    PEAR_REST_PREFERENCE = [
        RestDialects.REST13.value,
        RestDialects.REST12.value,
        RestDialects.REST11.value,
        RestDialects.REST10.value,
    ]
    PEAR_DEFAULT_CHANNEL = "pear.php.net"
    PEAR_CHANNEL_FILE = "/channel.xml"
    PEAR_DIST_SCHEME = "http"

    # XML namespaces of the PEAR channel and REST documents
    NS_CHANNEL = "http://pear.php.net/channel-1.0"
    NS_ALL_PACKAGES = "http://pear.php.net/dtd/rest.allpackages"
    NS_PACKAGE_INFO = "http://pear.php.net/dtd/rest.package"
    NS_ALL_RELEASES = "http://pear.php.net/dtd/rest.allreleases"
    NS_ALL_CATEGORIES = "http://pear.php.net/dtd/rest.allcategories"
    NS_CATEGORY_PACKAGES_INFO = "http://pear.php.net/dtd/rest.categorypackagesinfo"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "PEARCHANNEL_LOG_LEVEL"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    USER_AGENT = "pearchannel/0.1"
