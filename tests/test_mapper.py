"""
Tests for data mappers.
"""

import pytest

from dataloader.mapper import DataMapper, FunctionMapper, IdentityMapper


def test_identity_mapper():
    mapper = IdentityMapper()
    payload = {"id": 1}
    assert mapper.remote_to_local(payload) is payload
    assert mapper.local_to_domain(payload) is payload


def test_function_mapper():
    mapper = FunctionMapper(remote_to_local=str, local_to_domain=lambda row: f"<{row}>")
    assert mapper.remote_to_local(5) == "5"
    assert mapper.local_to_domain("5") == "<5>"


def test_function_mapper_defaults_to_identity():
    mapper = FunctionMapper(local_to_domain=len)
    assert mapper.remote_to_local([1, 2]) == [1, 2]
    assert mapper.local_to_domain([1, 2]) == 2


def test_mapper_interface_is_abstract():
    with pytest.raises(TypeError):
        DataMapper()
