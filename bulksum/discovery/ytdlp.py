"""Video discovery through the yt-dlp command line tool."""

import asyncio
import json
from typing import List, Optional

from rich.console import Console

from ..config import SourceConfig, SourceKind
from ..errors import DiscoveryError
from ..models import Item
from .base import DiscoveryBackend

console = Console()

WATCH_URL = "https://www.youtube.com/watch?v={}"


class YtDlpDiscovery(DiscoveryBackend):
    """List channel or playlist videos with yt-dlp --flat-playlist."""

    def __init__(self, binary: str = "yt-dlp", timeout: Optional[float] = 300.0) -> None:
        """Initialize yt-dlp backend."""
        self.binary = binary
        self.timeout = timeout

    def scan_url(self, source: SourceConfig) -> str:
        """Channel URLs are scanned through their /videos tab."""
        url = str(source.url)
        if source.resolved_kind == SourceKind.PLAYLIST:
            return url
        url = url.rstrip("/")
        if not url.endswith("/videos"):
            url += "/videos"
        return url

    def parse_output(self, output: str) -> List[Item]:
        """Parse one JSON document per line, skipping malformed lines."""
        items = []
        for line in output.splitlines():
            line = line.strip()
            if not line:
                continue
            try:
                video = json.loads(line)
            except json.JSONDecodeError:
                continue
            if not isinstance(video, dict) or not video.get("id"):
                continue

            items.append(
                Item(
                    id=video["id"],
                    title=video.get("title") or "Untitled",
                    url=WATCH_URL.format(video["id"]),
                    description=video.get("description"),
                    upload_date=video.get("upload_date"),
                    duration=video.get("duration"),
                )
            )
        return items

    async def fetch(self, source: SourceConfig, max_results: int) -> List[Item]:
        """Run yt-dlp and parse its output."""
        args = [
            "--flat-playlist",
            "--dump-json",
            "--no-warnings",
            "--playlist-end",
            str(max_results),
            self.scan_url(source),
        ]

        try:
            process = await asyncio.create_subprocess_exec(
                self.binary,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            raise DiscoveryError(f"{self.binary} not found on PATH")

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise DiscoveryError(f"{self.binary} timed out after {self.timeout}s")

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise DiscoveryError(message or f"{self.binary} exited with {process.returncode}")

        return self.parse_output(stdout.decode("utf-8", errors="replace"))[:max_results]
