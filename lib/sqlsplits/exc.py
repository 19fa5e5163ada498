class QuitException(Exception):
    pass


class UnterminatedError(Exception):

    def __init__(self, kind, split_points=None):
        super().__init__("unterminated {}".format(kind))
        self.kind = kind

        if split_points is None:
            split_points = []

        self.split_points = split_points


class ScannerAssumptionError(AssertionError):
    pass
