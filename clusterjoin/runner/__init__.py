from .runner_script import (
    RUNNER_HEADER as RUNNER_HEADER,
    render_runner as render_runner,
    write_runner as write_runner,
)
