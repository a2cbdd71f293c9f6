from datetime import datetime

from ci_publish.results import Modification


class RecordingGenerator:
    def __init__(self, document="<manifest/>"):
        self.document = document
        self.calls = []

    def generate(self, result, files):
        self.calls.append((result, list(files)))
        return self.document


class FailingGenerator:
    def generate(self, result, files):
        raise RuntimeError("manifest template missing")


def make_modification(name: str, kind: str) -> Modification:
    return Modification(
        file_name=name,
        type=kind,
        user_name="johnDoe",
        comment="A comment",
        change_number=1,
        modified_time=datetime(2009, 1, 1),
        email_address="email@somewhere.com",
        version="1.1.1.1",
    )
