"""Shared fixtures. Tokenization is faked so no encoding file is ever downloaded."""

from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def offline_tokenizer():
    encoding = MagicMock()
    encoding.encode.side_effect = lambda text: text.split()
    with patch("sigil_canvas.core.composer.tiktoken.get_encoding", return_value=encoding):
        yield encoding
