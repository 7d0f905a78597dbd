"""Configures pytest further."""
import functools

from cryptography.hazmat.primitives.asymmetric import rsa
import pytest

TARGET_SIZES = [1024, 2048, 3072, pytest.param(4096, marks=pytest.mark.slow)]
E = 65537


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extreme value extremely slow tests")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)


@functools.cache
def reference_key(size: int) -> rsa.RSAPrivateKey:
    """Generates one reference key per size for the whole session."""
    return rsa.generate_private_key(public_exponent=E, key_size=size)


@pytest.fixture(scope="session", params=TARGET_SIZES)
def keyset(request) -> rsa.RSAPrivateKey:
    return reference_key(request.param)


@pytest.fixture(scope="session")
def refkey() -> rsa.RSAPrivateKey:
    return reference_key(2048)
