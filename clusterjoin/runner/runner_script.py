"""
Startup script generation.

The generated script only relies on /bin/sh builtins:

    #!/bin/sh
    export COCKROACH_CHANNEL=kubernetes-secure
    /cockroach/cockroach start <resolved args>
"""

import os
import pathlib

from clusterjoin.config import RunConfig


RUNNER_HEADER = "#!/bin/sh\nexport COCKROACH_CHANNEL=kubernetes-secure\n"


def render_runner(config: RunConfig) -> str:
    return f"{RUNNER_HEADER}{config.exec_cmd()}\n"


def write_runner(path: str, script: str) -> pathlib.Path:
    output_path = pathlib.Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(script)
    os.chmod(output_path, 0o755)

    return output_path
