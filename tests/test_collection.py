import pytest

from loanfields.audit import AuditLog
from loanfields.collection import EntityCollection
from loanfields.families import NoPrimaryAttributeError
from loanfields.models import InsuranceRecord, LenderRecord, PropertyRecord
from loanfields.primary import primary_prefixes, set_primary
from loanfields.state import DictFieldStore


def _lenders():
    return DictFieldStore(
        {
            "lender1.full_name": "Acme",
            "lender1.is_primary": "true",
            "lender3.full_name": "Beta",
        }
    )


def test_set_primary_scenario():
    store = _lenders()
    set_primary(store, "lender", "lender3")
    assert store.get("lender1.is_primary") == "false"
    assert store.get("lender3.is_primary") == "true"
    assert primary_prefixes(store.snapshot(), "lender") == ["lender3"]


def test_set_primary_false_touches_only_target():
    store = _lenders()
    before = store.snapshot()
    set_primary(store, "lender", "lender3", False)
    after = store.snapshot()
    assert after["lender3.is_primary"] == "false"
    assert after["lender1.is_primary"] == before["lender1.is_primary"]
    assert set(after) - set(before) == {"lender3.is_primary"}


def test_set_primary_requires_primary_attribute():
    with pytest.raises(NoPrimaryAttributeError):
        set_primary(DictFieldStore(), "coborrower", "coborrower1")


def test_exactly_one_primary_after_each_set():
    lenders = EntityCollection(_lenders(), "lender")
    lenders.create(LenderRecord(full_name="Gamma"))
    for prefix in lenders.prefixes():
        lenders.set_primary(prefix)
        flagged = [r.id for r in lenders.records() if r.is_primary]
        assert flagged == [prefix]


def test_create_allocates_into_gap_and_writes_all_attributes():
    store = _lenders()
    lenders = EntityCollection(store, "lender")
    prefix = lenders.create()
    assert prefix == "lender2"
    assert store.get("lender2.full_name") == ""
    assert store.get("lender2.is_primary") == "false"
    assert store.get("lender2.primary_address.city") == ""
    assert lenders.prefixes() == ["lender1", "lender2", "lender3"]


def test_save_edit_and_new():
    store = DictFieldStore()
    policies = EntityCollection(store, "insurance")
    first = policies.save(InsuranceRecord(company_name="Shield", active=True))
    assert first == "insurance1"
    edited = policies.get(first).model_copy(update={"policy_number": "P-1"})
    assert policies.save(edited) == "insurance1"
    assert store.get("insurance1.policy_number") == "P-1"
    assert store.get("insurance1.active") == "true"
    assert policies.save(InsuranceRecord(company_name="Other")) == "insurance2"


def test_save_primary_demotes_siblings():
    store = DictFieldStore({"property1.primary_property": "true", "property1.street": "A"})
    properties = EntityCollection(store, "property")
    prefix = properties.save(PropertyRecord(street="B", primary_property=True))
    assert prefix == "property2"
    assert store.get("property1.primary_property") == "false"
    assert properties.primary().street == "B"


def test_update_routes_primary_flag():
    store = _lenders()
    lenders = EntityCollection(store, "lender")
    lenders.update("lender3", "is_primary", True)
    assert store.get("lender1.is_primary") == "false"
    assert store.get("lender3.is_primary") == "true"
    lenders.update("lender3", "tax_id", "12-3456789")
    assert lenders.get("lender3").tax_id == "12-3456789"


def test_get_unsaved_prefix_returns_defaults():
    lenders = EntityCollection(_lenders(), "lender")
    record = lenders.get("lender9")
    assert record.id == "lender9"
    assert record.full_name == ""


def test_delete_removes_every_key():
    store = _lenders()
    store.set("lender10.full_name", "Ten")
    lenders = EntityCollection(store, "lender")
    removed = lenders.delete("lender1")
    assert sorted(removed) == ["lender1.full_name", "lender1.is_primary"]
    assert lenders.prefixes() == ["lender3", "lender10"]
    assert lenders.next_prefix() == "lender1"


def test_delete_blanks_keys_when_store_cannot_remove():
    store = DictFieldStore({"lien1.holder": "Bank", "lien1.note": "x"}, allow_removal=False)
    liens = EntityCollection(store, "lien")
    liens.delete("lien1")
    assert store.snapshot() == {"lien1.holder": "", "lien1.note": ""}
    with pytest.raises(NotImplementedError):
        store.remove_prefix("lien1")


def test_primary_none_when_unflagged():
    lenders = EntityCollection(DictFieldStore({"lender1.full_name": "A"}), "lender")
    assert lenders.primary() is None


def test_writes_are_audited():
    log = AuditLog()
    store = DictFieldStore(audit=log, user="csr@example.com")
    charges = EntityCollection(store, "charge")
    prefix = charges.create()
    charges.view(prefix).set("charges.total_due", "40.00")
    entries = log.for_prefix(prefix)
    assert entries
    assert entries[-1].key == "charge1.total_due"
    assert entries[-1].old_value == ""
    assert entries[-1].new_value == "40.00"
    assert all(e.user == "csr@example.com" for e in entries)


def test_frame_lists_records():
    store = _lenders()
    df = EntityCollection(store, "lender").frame(columns=["full_name", "is_primary"])
    assert list(df.columns) == ["id", "display_name", "full_name", "is_primary"]
    assert list(df["id"]) == ["lender1", "lender3"]
    assert list(df["is_primary"]) == [True, False]
