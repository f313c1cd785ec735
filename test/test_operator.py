import pytest

from camlbuilder import Operator, OperatorType, Value, ValueType

COMPLEX_FACTORIES = [
    (Operator.equal, "Eq"),
    (Operator.not_equal, "Neq"),
    (Operator.greater_than, "Gt"),
    (Operator.greater_than_or_equal_to, "Geq"),
    (Operator.lower_than, "Lt"),
    (Operator.lower_than_or_equal_to, "Leq"),
    (Operator.begins_with, "BeginsWith"),
    (Operator.contains, "Contains"),
    (Operator.date_ranges_overlap, "DateRangesOverlap"),
    (Operator.includes, "Includes"),
    (Operator.not_includes, "NotIncludes"),
]


@pytest.mark.parametrize("factory, tag", COMPLEX_FACTORIES)
def test_complex_operator_with_type_and_payload(factory, tag):
    op = factory("Field", ValueType.TEXT, "x")
    assert op.tag == tag
    assert (
        op.render()
        == f'<{tag}><FieldRef Name="Field"/><Value Type="Text">x</Value></{tag}>'
    )


@pytest.mark.parametrize("factory, tag", COMPLEX_FACTORIES)
def test_complex_operator_with_value(factory, tag):
    value = Value.of(ValueType.TEXT, "x")
    assert factory("Field", value).render() == factory("Field", "text", "x").render()


@pytest.mark.parametrize("factory, tag", COMPLEX_FACTORIES)
def test_complex_operator_include_time(factory, tag):
    op = factory("Due", ValueType.DATE, "2024-06-30", include_time=True)
    assert op.value.include_time is True
    assert op.render() == (
        f'<{tag}><FieldRef Name="Due"/>'
        f'<Value Type="DateTime" IncludeTimeValue="TRUE">2024-06-30</Value></{tag}>'
    )


@pytest.mark.parametrize(
    "factory, tag", [(Operator.is_null, "IsNull"), (Operator.is_not_null, "IsNotNull")]
)
def test_unary_operator(factory, tag):
    op = factory("Owner")
    assert op.value is None
    assert op.render() == f'<{tag}><FieldRef Name="Owner"/></{tag}>'


def test_create_accepts_tags():
    op = Operator.create("Geq", "Size", ValueType.INTEGER, 10)
    assert op.operator_type == OperatorType.GREATER_THAN_OR_EQUAL_TO
    assert op.render() == '<Geq><FieldRef Name="Size"/><Value Type="Integer">10</Value></Geq>'


def test_unknown_operator_type():
    with pytest.raises(ValueError):
        Operator.create("Between", "Size", ValueType.INTEGER, 10)


def test_unary_operator_rejects_value():
    with pytest.raises(ValueError):
        Operator(
            operator_type=OperatorType.IS_NULL,
            field_name="Owner",
            value=Value.of(ValueType.TEXT, "x"),
        )


def test_complex_operator_requires_value():
    with pytest.raises(ValueError):
        Operator(operator_type=OperatorType.EQUAL, field_name="Title")


def test_empty_field_name():
    with pytest.raises(ValueError):
        Operator.equal("", ValueType.TEXT, "x")


def test_value_and_payload_are_exclusive():
    with pytest.raises(ValueError):
        Operator.equal("Title", Value.of(ValueType.TEXT, "x"), "y")


def test_lookup_id_marks_field_ref():
    op = Operator.equal("Project", ValueType.LOOKUP_ID, 12)
    assert op.render() == (
        '<Eq><FieldRef Name="Project" LookupId="TRUE"/>'
        '<Value Type="Lookup">12</Value></Eq>'
    )


def test_user_id_marks_field_ref():
    op = Operator.equal("AssignedTo", ValueType.USER_ID, 7)
    assert op.render() == (
        '<Eq><FieldRef Name="AssignedTo" LookupId="TRUE"/>'
        '<Value Type="Integer">7</Value></Eq>'
    )


def test_current_user_operand():
    op = Operator.equal("AssignedTo", Value.current_user())
    assert op.render() == (
        '<Eq><FieldRef Name="AssignedTo"/>'
        '<Value Type="Integer"><UserID/></Value></Eq>'
    )


def test_date_ranges_overlap_with_now():
    op = Operator.date_ranges_overlap("EventDate", Value.now(include_time=True))
    assert op.render() == (
        '<DateRangesOverlap><FieldRef Name="EventDate"/>'
        '<Value Type="DateTime" IncludeTimeValue="TRUE"><Now/></Value>'
        "</DateRangesOverlap>"
    )


def test_include_time_passed_to_value():
    op = Operator.lower_than("Due", "date", "2024-06-30", include_time=True)
    assert op.value.include_time is True
