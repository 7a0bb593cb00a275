import logging
import os
from dataclasses import dataclass
from pathlib import Path

from rulebook.constants import SCAN_IGNORED_DIRS
from rulebook.rules.sniffer import Classification, classify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleFile:
    path: Path
    classification: Classification


class RuleFileScanner:
    def discover(self, root: Path) -> list[RuleFile]:
        if not root.exists() or not root.is_dir():
            logger.warning("Rules directory not found: %s. Skipping.", root)
            return []

        found: list[RuleFile] = []
        for current, dir_names, file_names in os.walk(str(root), topdown=True):
            dir_names[:] = sorted(
                name for name in dir_names if name not in SCAN_IGNORED_DIRS
            )
            for file_name in sorted(file_names):
                path = Path(current) / file_name
                classification = classify(str(path))
                if classification is None:
                    logger.debug("Not a rule file: %s", path)
                    continue
                found.append(RuleFile(path=path, classification=classification))

        return found
