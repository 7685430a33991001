# --- Setup ---
import os


class ConfigManager:
    """This class represents the configuration for the app."""

    def load(self):
        # TODO: fix this
        userDataObject = os.environ.get("USER_DATA")
        return userDataObject


# unai-ignore-next-line
class LegacyHandler:
    pass
