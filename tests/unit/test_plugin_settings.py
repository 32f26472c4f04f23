"""
Plugin settings declaration tests.

Covers declaration order, defaults, choice sets, visibility dependencies
and the custom field / site notice listings.
"""

from __future__ import annotations

import pytest

from src.adapters.memory import InMemoryFacetofaceRepo
from src.components.html import HtmlWriter
from src.components.plugin_settings import (
    PARAM_EMAIL,
    PARAM_NOTAGS,
    PARAM_TEXT,
    AdminSettingsPage,
    ConfigCheckbox,
    ConfigMultiSelect,
    ConfigText,
    DuplicateSettingError,
    Heading,
    UnknownSettingError,
    build_settings_page,
    export_field_choices,
    list_of_customfields,
    list_of_sitenotices,
    role_choices,
)
from src.components.strings import LazyString, StringManager
from src.domain.entities import CustomField, ProfileField, Role, SiteNotice

EXPECTED_ORDER = [
    "facetoface/fromaddress",
    "facetoface/session_roles",
    "facetoface/limit_candidates",
    "facetoface/enableapprovals",
    "facetoface/manageremail_header",
    "facetoface/addchangemanageremail",
    "facetoface/manageraddressformat",
    "facetoface/manageraddressformatreadable",
    "facetoface/cost_header",
    "facetoface/hidecost",
    "facetoface/hidediscount",
    "facetoface/icalendar_header",
    "facetoface/oneemailperday",
    "facetoface/disableicalcancel",
    "facetoface_attendeesexporttofile_header",
    "facetoface_attendeesexportfields",
    "facetoface/customfields_header",
    "facetoface/sitenotices_header",
]


@pytest.fixture
def page(repo: InMemoryFacetofaceRepo, strings: StringManager) -> AdminSettingsPage:
    return build_settings_page(
        strings=strings,
        roles=repo.get_all_roles(),
        profile_fields=repo.get_custom_profile_fields(),
        customfields=repo.get_customfields(),
        sitenotices=repo.get_sitenotices(),
    )


@pytest.fixture
def empty_page(strings: StringManager) -> AdminSettingsPage:
    return build_settings_page(
        strings=strings, roles=[], profile_fields=[], customfields=[], sitenotices=[]
    )


class TestDeclaration:
    """Registered settings and their shape."""

    def test_declaration_order(self, page: AdminSettingsPage) -> None:
        assert page.names() == EXPECTED_ORDER

    def test_from_address(self, page: AdminSettingsPage) -> None:
        setting = page.get("facetoface/fromaddress")

        assert isinstance(setting, ConfigText)
        assert setting.paramtype == PARAM_EMAIL
        assert setting.size == 30
        assert setting.visiblename == "Sender address:"
        assert setting.default_value() == "noreply@example.com"

    def test_manager_address_params(self, page: AdminSettingsPage) -> None:
        assert page.get("facetoface/manageraddressformat").paramtype == PARAM_TEXT
        assert page.get("facetoface/manageraddressformatreadable").paramtype == PARAM_NOTAGS

    def test_checkbox_defaults(self, page: AdminSettingsPage) -> None:
        defaults = page.defaults()

        assert defaults["facetoface/enableapprovals"] == "1"
        for name in (
            "facetoface/limit_candidates",
            "facetoface/addchangemanageremail",
            "facetoface/hidecost",
            "facetoface/hidediscount",
            "facetoface/oneemailperday",
            "facetoface/disableicalcancel",
        ):
            assert isinstance(page.get(name), ConfigCheckbox)
            assert defaults[name] == "0"

    def test_headings_store_nothing(self, page: AdminSettingsPage) -> None:
        defaults = page.defaults()

        for setting in page:
            if isinstance(setting, Heading):
                assert setting.name not in defaults

    def test_multiselects_default_empty(self, page: AdminSettingsPage) -> None:
        defaults = page.defaults()

        assert defaults["facetoface/session_roles"] == ""
        assert defaults["facetoface_attendeesexportfields"] == ""

    def test_setting_name_parts(self, page: AdminSettingsPage) -> None:
        assert page.get("facetoface/fromaddress").plugin == "facetoface"
        assert page.get("facetoface/fromaddress").key == "fromaddress"
        assert page.get("facetoface_attendeesexportfields").plugin is None

    def test_export_labels_are_lazy(self, page: AdminSettingsPage) -> None:
        setting = page.get("facetoface_attendeesexportfields")

        assert isinstance(setting.visiblename, LazyString)
        assert str(setting.visiblename) == "Attendees export fields:"


class TestChoices:
    def test_session_role_choices(self, page: AdminSettingsPage) -> None:
        setting = page.get("facetoface/session_roles")

        assert isinstance(setting, ConfigMultiSelect)
        assert setting.choices == {"1": "Manager", "3": "Trainer"}

    def test_role_names_are_escaped(self) -> None:
        roles = [Role(id=9, shortname="odd", name="R&D <lead>")]

        assert role_choices(roles) == {"9": "R&amp;D &lt;lead&gt;"}

    def test_role_falls_back_to_shortname(self) -> None:
        assert role_choices([Role(id=2, shortname="coursecreator")]) == {"2": "coursecreator"}

    def test_export_field_choices(self, strings: StringManager) -> None:
        choices = export_field_choices([ProfileField(shortname="dietary", name="Dietary")], strings)

        assert list(choices)[:3] == ["middlename", "alternatename", "username"]
        assert len(choices) == 15
        assert str(choices["lang"]) == "Language"
        assert str(choices["phone2"]) == "Mobile phone"
        assert choices["profile_field_dietary"] == "Dietary (Custom field)"


class TestVisibility:
    MANAGER_FIELDS = (
        "facetoface/addchangemanageremail",
        "facetoface/manageraddressformat",
        "facetoface/manageraddressformatreadable",
    )

    def test_manager_fields_depend_on_approvals(self, page: AdminSettingsPage) -> None:
        rules = page.hide_rules

        assert [rule.dependent for rule in rules] == list(self.MANAGER_FIELDS)
        assert all(rule.dependenton == "facetoface/enableapprovals" for rule in rules)
        assert all(rule.condition == "notchecked" for rule in rules)

    def test_visible_while_approvals_enabled(self, page: AdminSettingsPage) -> None:
        for name in self.MANAGER_FIELDS:
            assert page.is_hidden(name) is False

    def test_hidden_when_approvals_disabled(self, page: AdminSettingsPage) -> None:
        values = {"facetoface/enableapprovals": "0"}

        for name in self.MANAGER_FIELDS:
            assert page.is_hidden(name, values) is True
        assert page.is_hidden("facetoface/hidecost", values) is False

    def test_describe_reports_hidden_state(self, page: AdminSettingsPage) -> None:
        views = {view.name: view for view in page.describe({"facetoface/enableapprovals": "0"})}

        assert views["facetoface/manageraddressformat"].hidden is True
        assert views["facetoface/enableapprovals"].value == "0"
        assert views["facetoface/cost_header"].value is None


class TestRegistry:
    def test_duplicate_names_rejected(self) -> None:
        page = AdminSettingsPage("test")
        page.add(ConfigCheckbox("facetoface/a", "A", ""))

        with pytest.raises(DuplicateSettingError):
            page.add(ConfigCheckbox("facetoface/a", "A again", ""))

    def test_hide_if_requires_known_settings(self) -> None:
        page = AdminSettingsPage("test")
        page.add(ConfigCheckbox("facetoface/a", "A", ""))

        with pytest.raises(UnknownSettingError):
            page.hide_if("facetoface/a", "facetoface/missing")

    def test_hide_if_conditions(self) -> None:
        page = AdminSettingsPage("test")
        page.add(ConfigText("facetoface/mode", "Mode", "", default="simple"))
        page.add(ConfigText("facetoface/extra", "Extra", ""))
        page.add(ConfigText("facetoface/other", "Other", ""))
        page.hide_if("facetoface/extra", "facetoface/mode", "eq", "simple")
        page.hide_if("facetoface/other", "facetoface/mode", "neq", "simple")

        assert page.is_hidden("facetoface/extra") is True
        assert page.is_hidden("facetoface/other") is False
        assert page.is_hidden("facetoface/extra", {"facetoface/mode": "full"}) is False

    def test_get_unknown(self) -> None:
        with pytest.raises(UnknownSettingError):
            AdminSettingsPage("test").get("facetoface/nothing")


class TestListings:
    def test_customfield_heading_links_to_new_field(self, page: AdminSettingsPage) -> None:
        info = page.get("facetoface/customfields_header").description

        assert info.endswith(
            '<p><a href="/mod/facetoface/customfield.php?id=0">Create a new custom field</a></p>'
        )
        assert "Location&nbsp;" in info

    def test_sitenotice_heading(self, page: AdminSettingsPage) -> None:
        info = page.get("facetoface/sitenotices_header").description

        assert "Parking&nbsp;" in info
        assert 'href="/mod/facetoface/sitenotice.php?id=0"' in info

    def test_empty_listings(self, empty_page: AdminSettingsPage) -> None:
        customfields = empty_page.get("facetoface/customfields_header").description
        sitenotices = empty_page.get("facetoface/sitenotices_header").description

        assert customfields.startswith("No custom fields defined<p>")
        assert sitenotices.startswith("No site notices defined<p>")

    def test_customfield_list_sorted_with_actions(self, strings: StringManager) -> None:
        fields = [CustomField(id=4, name="Venue"), CustomField(id=2, name="audience")]
        html = list_of_customfields(fields, strings, HtmlWriter("/pix"))

        assert html.index("audience") < html.index("Venue")
        assert 'href="/mod/facetoface/customfield.php?id=4"' in html
        assert 'href="/mod/facetoface/customfield.php?id=4&amp;d=1"' in html
        assert 'src="/pix/t/delete.svg"' in html

    def test_sitenotice_list_escapes_names(self, strings: StringManager) -> None:
        html = list_of_sitenotices([SiteNotice(id=1, name="Fire <drill>")], strings)

        assert "Fire &lt;drill&gt;&nbsp;" in html
