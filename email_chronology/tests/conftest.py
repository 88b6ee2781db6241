import logging

import pytest


@pytest.fixture
def logger():
    return logging.getLogger("test")


@pytest.fixture
def outlook_chain():
    return (
        "From: Alice <a@x.com>\n"
        "Sent: Monday, January 6, 2025 9:26 AM\n"
        "To: Bob <b@x.com>\n"
        "Subject: Hi\n"
        "\n"
        "Hello Bob.\n"
        "________________________________\n"
        "From: Bob <b@x.com>\n"
        "Sent: Tuesday, January 7, 2025 10:00 AM\n"
        "To: Alice <a@x.com>\n"
        "Subject: Re: Hi\n"
        "\n"
        "Hi Alice."
    )
