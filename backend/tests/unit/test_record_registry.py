"""Unit tests for the static record type registry."""

import pytest

from lifevault.domain.entities import Cardinality, RecordCategory, RecordType
from lifevault.domain.exceptions import UnknownRecordTypeError
from lifevault.domain.record_registry import (
    RECORD_META_BY_TYPE,
    RECORD_TYPE_REGISTRY,
    get_record_meta,
    get_types_for_category,
    is_singleton_type,
)


def test_registry_is_total_and_unique():
    assert set(RECORD_META_BY_TYPE) == set(RecordType)
    assert len(RECORD_TYPE_REGISTRY) == len(RecordType)


def test_lookup_by_type_and_by_value():
    meta = get_record_meta(RecordType.DRIVERS_LICENSE)
    assert meta.cardinality is Cardinality.SINGLE
    assert get_record_meta("DRIVERS_LICENSE") is meta


def test_unknown_type_is_a_lookup_error():
    with pytest.raises(UnknownRecordTypeError):
        get_record_meta("NOT_A_TYPE")


def test_category_lookup_is_sorted_by_sort_order():
    for category in RecordCategory:
        types = get_types_for_category(category)
        orders = [get_record_meta(t).sort_order for t in types]
        assert orders == sorted(orders)
        assert all(get_record_meta(t).category is category for t in types)


def test_cardinality_of_known_types():
    assert is_singleton_type(RecordType.MEDICAL_PROFILE)
    assert not is_singleton_type(RecordType.PASSPORT)
    assert not is_singleton_type(RecordType.PET_DOCUMENT)


def test_private_health_profile_is_private():
    assert get_record_meta(RecordType.PRIVATE_HEALTH_PROFILE).is_private
