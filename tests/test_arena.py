import pytest

from loanfields.arena import EntityArena
from loanfields.families import NoPrimaryAttributeError
from loanfields.models import LenderRecord
from loanfields.state import DictFieldStore


def test_existing_records_keep_their_prefix():
    values = {"lender1.full_name": "Acme", "lender3.full_name": "Beta"}
    arena = EntityArena.from_fields(values, "lender")
    assert [r.id for r in arena.records()] == ["lender1", "lender3"]
    fields = arena.to_fields()
    assert fields["lender1.full_name"] == "Acme"
    assert fields["lender3.full_name"] == "Beta"


def test_new_records_fill_gaps():
    arena = EntityArena.from_fields({"lender1.full_name": "Acme", "lender3.full_name": "Beta"}, "lender")
    first = arena.add(LenderRecord(full_name="Gamma"))
    second = arena.add(LenderRecord(full_name="Delta", id="lender1"))
    fields = arena.to_fields()
    assert arena.get(first).id == "lender2"
    assert arena.get(second).id == "lender4"
    assert fields["lender2.full_name"] == "Gamma"
    assert fields["lender4.full_name"] == "Delta"
    assert fields["lender1.full_name"] == "Acme"


def test_ids_survive_removal_and_renumbering():
    arena = EntityArena("lender")
    a = arena.add(LenderRecord(full_name="A"))
    b = arena.add(LenderRecord(full_name="B"))
    arena.to_fields()
    arena.remove(a)
    c = arena.add(LenderRecord(full_name="C"))
    arena.to_fields()
    assert arena.get(b).id == "lender2"
    assert arena.get(c).id == "lender1"
    assert arena.get(b).full_name == "B"


def test_set_primary_is_exclusive():
    arena = EntityArena("property")
    ids = [arena.add() for _ in range(3)]
    arena.set_primary(ids[1])
    arena.set_primary(ids[2])
    assert [r.primary_property for r in arena.records()] == [False, False, True]
    with pytest.raises(NoPrimaryAttributeError):
        EntityArena("charge").set_primary(arena.add())


def test_sync_writes_back_and_drops_removed():
    store = DictFieldStore(
        {"lender1.full_name": "Acme", "lender2.full_name": "Beta", "loan_terms.rate": "7"}
    )
    arena = EntityArena.from_fields(store.snapshot(), "lender")
    acme = next(i for i in arena.ids() if arena.get(i).full_name == "Acme")
    arena.remove(acme)
    arena.update(arena.ids()[0], email="beta@x.com")
    arena.sync(store)
    assert store.get("lender1.full_name") is None
    assert store.get("lender2.email") == "beta@x.com"
    assert store.get("loan_terms.rate") == "7"


def test_sync_blanks_removed_instances_when_store_cannot_remove():
    store = DictFieldStore(
        {"lender1.full_name": "Acme", "lender2.full_name": "Beta"}, allow_removal=False
    )
    arena = EntityArena.from_fields(store.snapshot(), "lender")
    arena.remove(arena.ids()[0])
    arena.sync(store)
    assert store.get("lender1.full_name") == ""
    assert store.get("lender2.full_name") == "Beta"


def test_arena_is_exported():
    import loanfields

    assert loanfields.EntityArena is EntityArena
    assert {"EntityArena", "AuditLog", "records_frame"} <= set(loanfields.__all__)
