import pytest

import plar


@pytest.fixture
def run_plar():
    """Run Plar source and return (output lines, error)."""
    def run(text, interpreter=None, **kwargs):
        output = []
        if interpreter is None:
            interpreter = plar.Interpreter(output=output.append, **kwargs)
        else:
            interpreter.output = output.append
        _, error, _ = plar.run('<teste>', text, interpreter)
        return output, error
    return run
