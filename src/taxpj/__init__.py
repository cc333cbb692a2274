"""taxpj - corporate tax and ledger entries from investment statements."""

__version__ = "0.1.0"


# The CLI pulls in every command module, so it is only loaded on demand
def __getattr__(name):
    if name == "main":
        from taxpj.cli.main import main

        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
