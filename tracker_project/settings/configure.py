import os
import sys
from dotenv import load_dotenv

load_dotenv()


def configure_settings_module():
    """
    Select the settings module unless DJANGO_SETTINGS_MODULE is already set.
    `manage.py test` runs against the test settings, everything else against base.
    """
    default_module = "tracker_project.settings.test" if "test" in sys.argv else "tracker_project.settings.base"
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", default_module)
    return os.environ["DJANGO_SETTINGS_MODULE"]
