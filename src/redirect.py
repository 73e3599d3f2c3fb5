"""Redirect execution through a navigator."""

import webbrowser

from interfaces import INavigator


class BrowserNavigator(INavigator):
    def navigate(self, url: str) -> None:
        webbrowser.open(url, new=0)


class DryRunNavigator(INavigator):
    def navigate(self, url: str) -> None:
        print(url)


class RedirectExecutor:
    def __init__(self, navigator: INavigator, logger=None):
        self.navigator = navigator
        self.logger = logger

    def execute(self, result) -> bool:
        if not result.is_redirect:
            return False
        if self.logger:
            self.logger.info(f"\033[92m[INFO]:\033[97m Redirecting to {result.target_url}\033[0m")
        self.navigator.navigate(result.target_url)
        return True
