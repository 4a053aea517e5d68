from typing import Optional

from chatlink.clients import AppStarter, LinkOpener, Navigator
from chatlink.config import BootstrapSettings, get_settings
from chatlink.constants import BACKGROUND_ROOT, Events
from chatlink.logger import get_logger, log_event

logger = get_logger(__name__)


class OnboardingFlow:
    """
    Entry screen in front of the server bootstrap.

    Joining a workspace is the default path, so start() opens the bootstrap
    right away; creating a workspace sends the user to the signup page.
    """

    def __init__(
        self,
        navigator: Navigator,
        link_opener: LinkOpener,
        app_starter: AppStarter,
        settings: Optional[BootstrapSettings] = None,
    ):
        if navigator is None or link_opener is None or app_starter is None:
            raise ValueError("navigator, link_opener and app_starter are required.")
        self.navigator = navigator
        self.link_opener = link_opener
        self.app_starter = app_starter
        self.settings = settings or get_settings(BootstrapSettings)

    def start(self) -> None:
        self.join_workspace()

    def join_workspace(self) -> None:
        log_event(Events.ONBOARD_JOIN_A_WORKSPACE)
        self.navigator.open_new_server()

    async def create_workspace(self) -> bool:
        log_event(Events.ONBOARD_CREATE_NEW_WORKSPACE)
        try:
            await self.link_opener.open_url(self.settings.create_workspace_url)
        except Exception as e:
            logger.warning(f"Could not open {self.settings.create_workspace_url}: {e}")
            log_event(Events.ONBOARD_CREATE_NEW_WORKSPACE_F)
            return False
        return True

    def handle_back_press(self) -> bool:
        """Send the app to the background. Always lets the platform continue."""
        self.app_starter.app_start(root=BACKGROUND_ROOT)
        return False


__all__ = ["OnboardingFlow"]
