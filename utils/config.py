# =============================================================================
#
# Copyright 2017 by Leland Lucius
#
# Released under the GNU Affero GPL
# See: https://github.com/lllucius/climacast/blob/master/LICENSE
#
# =============================================================================

import logging
import os

from dotenv import load_dotenv

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


load_dotenv()


class Config:
    """
    Configuration class for managing environment variables and application settings.
    Provides a centralized location for all configuration values.

    Environment Variables:
        app_id: Alexa skill application ID (default: amzn1.ask.skill.test)
        NOAA_API_URL: NOAA CO-OPS data getter endpoint
        NOAA_APPLICATION: Application name reported to NOAA
        TIDE_DATUM: Vertical datum for the predictions (default: MLLW)
        TIDE_UNITS: Units for the predictions (default: english)
        TIDE_TIME_ZONE: NOAA time zone convention (default: lst_ldt)
        LOCAL_TIMEZONE: Time zone used to decide what "today" is
        DEFAULT_CITY: City used when a one-shot request names none
        STATIONS_FILE: Optional JSON file replacing the built-in station table
        HTTP_TIMEOUT: Seconds to wait for NOAA before giving up

    Example:
        Access configuration values:
            app_id = Config.APP_ID
            endpoint = Config.NOAA_API_URL
    """

    # Application identifiers
    APP_ID: str = os.environ.get("app_id", "amzn1.ask.skill.test")
    SKILL_NAME: str = "Cape Cod Tides"
    CARD_TITLE: str = "CapeCodTides"

    # NOAA CO-OPS API settings
    NOAA_API_URL: str = os.environ.get(
        "NOAA_API_URL", "https://tidesandcurrents.noaa.gov/api/datagetter"
    )
    NOAA_APPLICATION: str = os.environ.get("NOAA_APPLICATION", "Alexa.CapeCod.Tides")
    TIDE_DATUM: str = os.environ.get("TIDE_DATUM", "MLLW")
    TIDE_UNITS: str = os.environ.get("TIDE_UNITS", "english")
    TIDE_TIME_ZONE: str = os.environ.get("TIDE_TIME_ZONE", "lst_ldt")

    # Dialog settings
    LOCAL_TIMEZONE: str = os.environ.get("LOCAL_TIMEZONE", "America/New_York")
    DEFAULT_CITY: str = os.environ.get("DEFAULT_CITY", "Plymouth")
    STATIONS_FILE: str = os.environ.get("STATIONS_FILE", "")

    # HTTP settings
    HTTP_TIMEOUT: int = int(os.environ.get("HTTP_TIMEOUT", "30"))

    @classmethod
    def validate(cls):
        """
        Validate required configuration values.

        Raises:
            ValueError: If required configuration is missing or invalid
        """
        # Check for required values in production (not in test mode)
        is_test_mode = os.environ.get("SKILLTEST", "").lower() == "true"

        if not is_test_mode:
            if not cls.APP_ID or cls.APP_ID == "amzn1.ask.skill.test":
                logger.warning("APP_ID not set or using test value")

        if not cls.NOAA_API_URL:
            raise ValueError("NOAA_API_URL must be set")

        if not cls.DEFAULT_CITY:
            raise ValueError("DEFAULT_CITY must be set")

        if cls.HTTP_TIMEOUT <= 0:
            raise ValueError("HTTP_TIMEOUT must be positive")

        if cls.STATIONS_FILE and not os.path.exists(cls.STATIONS_FILE):
            raise ValueError("STATIONS_FILE %s does not exist" % cls.STATIONS_FILE)

        logger.info("Configuration validated successfully")
