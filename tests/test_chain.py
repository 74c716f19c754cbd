"""
Unit tests for splitting a leaf + intermediate PEM chain.
"""
from __future__ import annotations

import pytest

from certhelper.chain import split_chain
from certhelper.errors import ChainParseError


def test_split_two_certificate_chain(leaf_pem, intermediate_pem):
    chain = f"{leaf_pem}\n{intermediate_pem}"
    leaf, intermediate = split_chain(chain)
    assert leaf == leaf_pem
    assert intermediate == intermediate_pem
    assert f"{leaf}\n{intermediate}" == chain


def test_split_accepts_single_trailing_newline(leaf_pem, intermediate_pem):
    leaf, intermediate = split_chain(f"{leaf_pem}\n{intermediate_pem}\n")
    assert (leaf, intermediate) == (leaf_pem, intermediate_pem)


def test_split_results_are_loadable_certificates(leaf_pem, intermediate_pem):
    from cryptography import x509

    leaf, intermediate = split_chain(f"{leaf_pem}\n{intermediate_pem}")
    assert x509.load_pem_x509_certificate(leaf.encode()).subject.rfc4514_string() == "CN=example.com"
    assert "Intermediate" in x509.load_pem_x509_certificate(intermediate.encode()).subject.rfc4514_string()


@pytest.mark.parametrize(
    "build",
    [
        pytest.param(lambda leaf, inter: "", id="empty"),
        pytest.param(lambda leaf, inter: leaf, id="one-block"),
        pytest.param(lambda leaf, inter: f"{leaf}\n{inter}\n{inter}", id="three-blocks"),
        pytest.param(lambda leaf, inter: f"{leaf}\n\n{inter}", id="blank-line-separator"),
        pytest.param(lambda leaf, inter: f"{leaf}\r\n{inter}", id="crlf-separator"),
        pytest.param(lambda leaf, inter: f"{leaf}{inter}", id="no-separator"),
        pytest.param(lambda leaf, inter: f"junk\n{leaf}\n{inter}", id="leading-content"),
        pytest.param(lambda leaf, inter: f"{leaf}\n{inter}\njunk", id="trailing-content"),
        pytest.param(lambda leaf, inter: f"{leaf}\n{inter}\n\n", id="two-trailing-newlines"),
        pytest.param(
            lambda leaf, inter: leaf + "\n" + inter.replace("CERTIFICATE", "PRIVATE KEY"),
            id="wrong-second-label",
        ),
    ],
)
def test_split_rejects_malformed_chain(build, leaf_pem, intermediate_pem):
    with pytest.raises(ChainParseError):
        split_chain(build(leaf_pem, intermediate_pem))


def test_split_rejects_non_string(leaf_pem, intermediate_pem):
    with pytest.raises(ChainParseError):
        split_chain(f"{leaf_pem}\n{intermediate_pem}".encode())
