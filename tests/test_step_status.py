from __future__ import annotations

from core.validators import validate_name
from wizard.field_store import FieldStore
from wizard.fields import FieldSpec, SelectionSpec, field_rule, when_false
from wizard.flows.sections import education_section, role_section
from wizard.step_registry import FormStep, OptionalStep, RepeatableStep, SelectionStep
from wizard.step_status import evaluate_step, is_step_valid


def _form_store(**values: object) -> FieldStore:
    store = FieldStore()
    for key, value in values.items():
        store.set(key, value)
    return store


NAME_STEP = FormStep(
    key="about",
    label="About",
    fields=(
        FieldSpec("name", "Name", validator=field_rule(validate_name)),
        FieldSpec("nickname", "Nickname", validator=field_rule(validate_name), required=False),
    ),
)


def test_form_step_requires_validator_pass_not_just_presence() -> None:
    assert not is_step_valid(NAME_STEP, _form_store(name="A", nickname=""))
    assert is_step_valid(NAME_STEP, _form_store(name="Al", nickname=""))


def test_optional_field_validated_only_when_filled() -> None:
    check = evaluate_step(NAME_STEP, _form_store(name="Al", nickname="7"))
    assert not check.is_valid
    assert set(check.errors) == {"nickname"}


def test_conditional_field_is_skipped_while_inapplicable() -> None:
    step = FormStep(
        key="job",
        label="Job",
        fields=(
            FieldSpec("current", "Current", required=False),
            FieldSpec("ended", "Ended", required_when=when_false("current")),
        ),
    )
    assert is_step_valid(step, _form_store(current=True, ended=""))
    assert not is_step_valid(step, _form_store(current=False, ended=""))


def test_selection_step_needs_a_choice() -> None:
    step = SelectionStep(
        key="skills",
        label="Skills",
        selection=SelectionSpec("skills", "Skills", multiple=True, error_message="Pick one"),
        fields=(FieldSpec("note", "Note", required=False),),
    )
    check = evaluate_step(step, _form_store(skills=(), note=""))
    assert check.errors == {"skills": "Pick one"}
    assert is_step_valid(step, _form_store(skills=("design",), note=""))


def test_optional_step_always_passes() -> None:
    step = OptionalStep(key="thumb", label="Thumbnail", fields=(FieldSpec("uri", "Thumbnail"),))
    assert is_step_valid(step, FieldStore())


def _education_store(entry_ids) -> FieldStore:
    return FieldStore([education_section(), role_section()], id_factory=entry_ids)


def _fill_education(store: FieldStore, entry_id: str) -> None:
    store.set(f"{entry_id}:school_university", "IIT Delhi")
    store.set(f"{entry_id}:degree_program", "B.Tech")
    store.set(f"{entry_id}:start_year", "2018")


def _fill_role(store: FieldStore, entry_id: str) -> None:
    store.set(f"{entry_id}:current_role", "Engineer")
    store.set(f"{entry_id}:company_organisation", "Kalon")
    store.set(f"{entry_id}:start_date", "2021-06-01")


def test_repeatable_step_any_not_all(entry_ids) -> None:
    """One fully valid entry per section is enough; blank extras do not block."""

    step = RepeatableStep(key="edu", label="Education", sections=(education_section(), role_section()))
    store = _education_store(entry_ids)  # e1 education, e2 role
    assert not is_step_valid(step, store)

    _fill_education(store, "e1")
    _fill_role(store, "e2")
    store.add_entry("roles")  # e3 stays blank
    check = evaluate_step(step, store)

    assert check.is_valid
    assert check.valid_entries == {"educations": ("e1",), "roles": ("e2",)}
    assert "e3:current_role" in check.errors
    assert "e3:current_role" in check.checked_keys


def test_currently_enrolled_controls_end_year(entry_ids) -> None:
    step = RepeatableStep(key="edu", label="Education", sections=(education_section(),))
    store = FieldStore([education_section()], id_factory=entry_ids)
    _fill_education(store, "e1")
    assert store.get("e1:currently_enrolled") is True
    assert is_step_valid(step, store)

    store.set("e1:currently_enrolled", False)
    check = evaluate_step(step, store)
    assert not check.is_valid
    assert check.errors["e1:end_year"] == "End year is required"

    store.set("e1:end_year", "2017")
    assert evaluate_step(step, store).errors["e1:end_year"] == "End year must be after start year"
    store.set("e1:end_year", "2022")
    assert is_step_valid(step, store)
