from datetime import datetime

import pytest

from camlbuilder import Operator, ValueType


@pytest.fixture()
def title_eq():
    return Operator.equal("Title", ValueType.TEXT, "Report")


@pytest.fixture()
def modified_gt():
    return Operator.greater_than("Modified", ValueType.DATETIME, datetime(2024, 1, 15, 8, 0))


@pytest.fixture()
def owner_set():
    return Operator.is_not_null("Owner")


@pytest.fixture()
def status_open():
    return Operator.equal("Status", ValueType.CHOICE, "Open")


@pytest.fixture()
def title_xml():
    return '<Eq><FieldRef Name="Title"/><Value Type="Text">Report</Value></Eq>'


@pytest.fixture()
def modified_xml():
    return (
        '<Gt><FieldRef Name="Modified"/>'
        '<Value Type="DateTime">2024-01-15T08:00:00Z</Value></Gt>'
    )


@pytest.fixture()
def owner_xml():
    return '<IsNotNull><FieldRef Name="Owner"/></IsNotNull>'


@pytest.fixture()
def status_xml():
    return '<Eq><FieldRef Name="Status"/><Value Type="Choice">Open</Value></Eq>'
