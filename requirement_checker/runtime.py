"""Detection of the PHP runtime the requirements are checked against."""

import json
import logging
import subprocess
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import RuntimeProbeError


logger = logging.getLogger(__name__)

# Printed as a single JSON document so one process start is enough.
PROBE_SCRIPT = (
    "echo json_encode(array("
    "'version' => PHP_VERSION, "
    "'extensions' => get_loaded_extensions(), "
    "'ini_path' => php_ini_loaded_file()"
    "));"
)


class RuntimeEnvironment(BaseModel):
    """Snapshot of a PHP installation: version, loaded extensions and php.ini path."""
    version: str
    extensions: List[str] = Field(default_factory=list)
    ini_path: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator('ini_path', mode='before')
    @classmethod
    def validate_ini_path(cls, v):
        # php_ini_loaded_file() returns false when no php.ini is used
        if v is False or v == '':
            return None
        return v

    def has_extension(self, extension: str) -> bool:
        """Tell whether an extension is loaded (case-insensitive, like extension_loaded())."""
        wanted = extension.lower()
        return any(loaded.lower() == wanted for loaded in self.extensions)


class RuntimeProbe:
    """Reads the runtime state of a PHP binary."""

    def __init__(self, php_binary: str = "php", timeout: int = 30):
        self.php_binary = php_binary
        self.timeout = timeout

    def detect(self) -> RuntimeEnvironment:
        """Run the PHP binary once and collect its runtime state.

        Returns:
            RuntimeEnvironment describing the binary

        Raises:
            RuntimeProbeError: If the binary is missing, fails, times out
                or prints something that is not the expected JSON
        """
        logger.debug(f"Probing PHP runtime with {self.php_binary}")

        try:
            result = subprocess.run(
                [self.php_binary, "-r", PROBE_SCRIPT],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise RuntimeProbeError(f"PHP binary not found: {self.php_binary}")
        except subprocess.TimeoutExpired:
            raise RuntimeProbeError(
                f"PHP binary {self.php_binary} did not answer within {self.timeout}s"
            )

        if result.returncode != 0:
            raise RuntimeProbeError(
                f"PHP binary {self.php_binary} exited with code {result.returncode}: "
                f"{result.stderr.strip()}"
            )

        try:
            data = json.loads(result.stdout)
            runtime = RuntimeEnvironment(**data)
        except (json.JSONDecodeError, TypeError, ValueError) as e:
            raise RuntimeProbeError(f"Unexpected output from {self.php_binary}: {e}")

        logger.info(
            f"Detected PHP {runtime.version} with {len(runtime.extensions)} extensions "
            f"(php.ini: {runtime.ini_path or 'none'})"
        )
        return runtime
