import pytest
from fastapi import HTTPException
from sqlalchemy import select

from church_admin.models.entities import Family, FamilyRoleEnum, House, Member
from church_admin.services.household import (
    assign_member,
    assign_members_batch,
    change_family_role,
    create_house,
    delete_family,
    delete_house,
    link_related_families,
    related_families,
    remove_member,
    set_head_of_family,
    unlink_related_families,
    validate_placement,
)


def _family(db, name):
    family = Family(name=name)
    db.add(family)
    db.flush()
    return family


def _member(db, name, **fields):
    member = Member(name=name, **fields)
    db.add(member)
    db.flush()
    return member


def test_assign_member_into_house_of_family(db_session):
    family = _family(db_session, "Smith")
    house = create_house(db_session, family.id, "North House")
    member = _member(db_session, "John Smith")

    assign_member(db_session, member.id, family.id, house.id)
    db_session.commit()

    assert member.family_id == family.id
    assert member.house_id == house.id


def test_assign_member_rejects_house_of_other_family(db_session):
    smith = _family(db_session, "Smith")
    jones = _family(db_session, "Jones")
    jones_house = create_house(db_session, jones.id, "South House")
    member = _member(db_session, "John Smith")

    with pytest.raises(HTTPException) as exc_info:
        assign_member(db_session, member.id, smith.id, jones_house.id)
    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "house does not belong to family"


def test_validate_placement_requires_family_for_house(db_session):
    family = _family(db_session, "Smith")
    house = create_house(db_session, family.id, "North House")

    with pytest.raises(HTTPException) as exc_info:
        validate_placement(db_session, None, house.id)
    assert exc_info.value.status_code == 400


def test_moving_to_another_family_drops_house_and_spouse(db_session):
    smith = _family(db_session, "Smith")
    jones = _family(db_session, "Jones")
    house = create_house(db_session, smith.id, "North House")
    wife = _member(db_session, "Mary Smith", family_id=smith.id)
    husband = _member(db_session, "John Smith", family_id=smith.id, house_id=house.id, spouse_id=wife.id)

    assign_member(db_session, husband.id, jones.id)

    assert husband.family_id == jones.id
    assert husband.house_id is None
    assert husband.spouse_id is None


def test_reassigning_same_family_keeps_house(db_session):
    family = _family(db_session, "Smith")
    house = create_house(db_session, family.id, "North House")
    member = _member(db_session, "John Smith", family_id=family.id, house_id=house.id)

    assign_member(db_session, member.id, family.id, family_role=FamilyRoleEnum.son)

    assert member.house_id == house.id
    assert member.family_role == FamilyRoleEnum.son


def test_remove_member_clears_household_fields(db_session):
    family = _family(db_session, "Smith")
    house = create_house(db_session, family.id, "North House")
    member = _member(
        db_session,
        "John Smith",
        family_id=family.id,
        house_id=house.id,
        family_role=FamilyRoleEnum.head,
        head_of_family=True,
    )

    remove_member(db_session, member.id)

    assert member.family_id is None
    assert member.house_id is None
    assert member.family_role is None
    assert member.head_of_family is False


def test_create_house_with_head_makes_member_head(db_session):
    family = _family(db_session, "Smith")
    member = _member(db_session, "John Smith")

    house = create_house(db_session, family.id, "North House", head_member_id=member.id)
    db_session.commit()

    assert house.head_member_id == member.id
    assert member.family_id == family.id
    assert member.house_id == house.id
    assert member.family_role == FamilyRoleEnum.head
    assert member.head_of_family is True


def test_create_house_with_new_head_member(db_session):
    family = _family(db_session, "Smith")

    house = create_house(db_session, family.id, "North House", head_member_data={"name": "Peter Smith"})
    head = db_session.get(Member, house.head_member_id)

    assert head.name == "Peter Smith"
    assert head.house_id == house.id
    assert head.family_id == family.id


def test_create_house_with_head_moves_family_head_flag(db_session):
    family = _family(db_session, "Smith")
    john = _member(db_session, "John Smith", family_id=family.id)
    peter = _member(db_session, "Peter Smith")
    set_head_of_family(db_session, john.id, family.id)

    create_house(db_session, family.id, "North House", head_member_id=peter.id)
    create_house(db_session, family.id, "South House", head_member_data={"name": "Mary Smith"})
    db_session.commit()

    heads = db_session.execute(
        select(Member.name).where(Member.family_id == family.id, Member.head_of_family.is_(True))
    ).scalars().all()
    assert heads == ["Mary Smith"]


def test_create_house_with_unknown_head_is_rejected(db_session):
    family = _family(db_session, "Smith")

    with pytest.raises(HTTPException) as exc_info:
        create_house(db_session, family.id, "North House", head_member_id=999)
    assert exc_info.value.status_code == 400


def test_delete_house_detaches_members_but_keeps_family(db_session):
    family = _family(db_session, "Smith")
    member = _member(db_session, "John Smith")
    house = create_house(db_session, family.id, "North House", head_member_id=member.id)
    db_session.commit()

    delete_house(db_session, house.id)
    db_session.commit()
    db_session.refresh(member)

    assert db_session.get(House, house.id) is None
    assert member.family_id == family.id
    assert member.house_id is None
    assert member.head_of_family is False


def test_delete_family_unassigns_members_and_removes_houses(db_session):
    smith = _family(db_session, "Smith")
    jones = _family(db_session, "Jones")
    house = create_house(db_session, smith.id, "North House")
    member = _member(db_session, "John Smith", family_id=smith.id, house_id=house.id, family_role=FamilyRoleEnum.son)
    link_related_families(db_session, smith.id, jones.id)
    db_session.commit()
    smith_id, house_id = smith.id, house.id

    delete_family(db_session, smith_id)
    db_session.commit()
    db_session.refresh(member)

    assert db_session.get(Family, smith_id) is None
    assert db_session.get(House, house_id) is None
    assert member.family_id is None
    assert member.house_id is None
    assert member.family_role is None
    assert related_families(db_session, jones.id) == []


def test_related_families_are_symmetric(db_session):
    smith = _family(db_session, "Smith")
    jones = _family(db_session, "Jones")

    link_related_families(db_session, smith.id, jones.id)

    assert [f.id for f in related_families(db_session, smith.id)] == [jones.id]
    assert [f.id for f in related_families(db_session, jones.id)] == [smith.id]

    with pytest.raises(HTTPException) as exc_info:
        link_related_families(db_session, jones.id, smith.id)
    assert exc_info.value.status_code == 409

    unlink_related_families(db_session, jones.id, smith.id)
    assert related_families(db_session, smith.id) == []

    with pytest.raises(HTTPException) as exc_info:
        unlink_related_families(db_session, smith.id, jones.id)
    assert exc_info.value.status_code == 404


def test_family_cannot_relate_to_itself(db_session):
    smith = _family(db_session, "Smith")

    with pytest.raises(HTTPException) as exc_info:
        link_related_families(db_session, smith.id, smith.id)
    assert exc_info.value.status_code == 400


def test_head_flag_is_unique_but_head_role_is_not(db_session):
    family = _family(db_session, "Smith")
    john = _member(db_session, "John Smith", family_id=family.id)
    mary = _member(db_session, "Mary Smith", family_id=family.id)

    change_family_role(db_session, john.id, FamilyRoleEnum.head)
    change_family_role(db_session, mary.id, FamilyRoleEnum.head)
    set_head_of_family(db_session, john.id, family.id)
    set_head_of_family(db_session, mary.id, family.id)
    db_session.commit()
    db_session.refresh(john)

    assert john.family_role == FamilyRoleEnum.head
    assert mary.family_role == FamilyRoleEnum.head
    assert john.head_of_family is False
    assert mary.head_of_family is True


def test_set_head_requires_membership(db_session):
    smith = _family(db_session, "Smith")
    outsider = _member(db_session, "Outsider")

    with pytest.raises(HTTPException) as exc_info:
        set_head_of_family(db_session, outsider.id, smith.id)
    assert exc_info.value.status_code == 400


def test_change_family_role_requires_family(db_session):
    member = _member(db_session, "Loner")

    with pytest.raises(HTTPException) as exc_info:
        change_family_role(db_session, member.id, FamilyRoleEnum.son)
    assert exc_info.value.status_code == 400


def test_batch_assignment_skips_duplicate_ids(db_session):
    family = _family(db_session, "Smith")
    a = _member(db_session, "A")
    b = _member(db_session, "B")

    members = assign_members_batch(db_session, family.id, [a.id, b.id, a.id])

    assert [m.id for m in members] == [a.id, b.id]
    assert {a.family_id, b.family_id} == {family.id}
