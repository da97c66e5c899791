class BundleError(Exception):
    """Base class for every failure that aborts a bundling run."""

    exit_code = 1

    def __init__(self, path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class BaseDirError(BundleError):
    # The directory holding the script cannot be resolved or entered.
    exit_code = 3


class InputReadError(BundleError):
    exit_code = 4


class OutputWriteError(BundleError):
    exit_code = 5
