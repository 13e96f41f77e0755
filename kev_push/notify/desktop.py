"""Desktop notifications via the platform's command-line notifier."""

import logging
import shutil
import subprocess
import sys
from typing import List, Optional

from kev_push import NotifyError
from kev_push.notify import NotificationSink

logger = logging.getLogger(__name__)


class NullDesktopSink(NotificationSink):
    name = "desktop"

    def send(self, title: str, message: str, url: str) -> None:
        logger.debug("No desktop notifier available; skipping")


class _CommandSink(NotificationSink):
    name = "desktop"
    timeout = 10

    def command(self, title: str, body: str) -> List[str]:
        raise NotImplementedError

    def send(self, title: str, message: str, url: str) -> None:
        body = f"Visit {url} for more info."
        try:
            subprocess.run(self.command(title, body), check=True, timeout=self.timeout,
                           stdout=subprocess.DEVNULL, stderr=subprocess.PIPE)
        except (OSError, subprocess.SubprocessError) as exc:
            raise NotifyError(f"desktop notification failed: {exc}") from exc


class MacDesktopSink(_CommandSink):
    def command(self, title: str, body: str) -> List[str]:
        script = f"display notification {_applescript_str(body)} with title {_applescript_str(title)}"
        return ["osascript", "-e", script]


class LinuxDesktopSink(_CommandSink):
    def command(self, title: str, body: str) -> List[str]:
        return ["notify-send", "--app-name=kev-push", title, body]


def _applescript_str(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def desktop_sink_for_platform(platform: Optional[str] = None) -> NotificationSink:
    """Pick the desktop sink for this machine, or a no-op sink."""
    platform = platform or sys.platform
    if platform == "darwin" and shutil.which("osascript"):
        return MacDesktopSink()
    if platform.startswith("linux") and shutil.which("notify-send"):
        return LinuxDesktopSink()
    return NullDesktopSink()
