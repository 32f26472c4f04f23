"""
Plugin settings component - Admin settings declaration for face-to-face.

Registers the plugin's configuration fields, headings and visibility
dependencies on an admin settings page.
"""

from __future__ import annotations

from src.components.html import (
    HtmlTable,
    HtmlWriter,
    PixIcon,
    Url,
    end_tag,
    format_string,
    link,
    render_table,
    start_tag,
)
from src.components.strings import LazyString, StringManager
from src.domain.entities import CustomField, ProfileField, Role, SiteNotice

from ._impl import AdminSettingsPage
from .models import (
    PARAM_EMAIL,
    PARAM_NOTAGS,
    PARAM_TEXT,
    ConfigCheckbox,
    ConfigMultiSelect,
    ConfigText,
    Heading,
)

COMPONENT = "facetoface"

CUSTOMFIELD_URL = "/mod/facetoface/customfield.php"
SITENOTICE_URL = "/mod/facetoface/sitenotice.php"

# Basic user fields offered for the attendees export, keyed by user field
# with the core string that labels them.
BASIC_EXPORT_FIELDS = [
    ("middlename", "middlename"),
    ("alternatename", "alternatename"),
    ("username", "username"),
    ("idnumber", "idnumber"),
    ("email", "email"),
    ("phone1", "phone1"),
    ("phone2", "phone2"),
    ("department", "department"),
    ("institution", "institution"),
    ("city", "city"),
    ("country", "country"),
    ("lang", "language"),
    ("firstnamephonetic", "firstnamephonetic"),
    ("lastnamephonetic", "lastnamephonetic"),
]


# --- Listings ---


def _list_with_actions(
    entries: list[tuple[int, str]],
    base_url: str,
    empty_identifier: str,
    strings: StringManager,
    writer: HtmlWriter,
) -> str:
    if not entries:
        return strings.get_string(empty_identifier)

    str_edit = strings.get_string("edit", "core")
    str_delete = strings.get_string("delete", "core")

    table = HtmlTable(attributes={"class": "f2flist", "style": "width: 50%"})
    for entry_id, name in sorted(entries, key=lambda entry: entry[1].lower()):
        editlink = writer.action_icon(Url(base_url, {"id": entry_id}), PixIcon("t/edit", str_edit))
        deletelink = writer.action_icon(
            Url(base_url, {"id": entry_id, "d": 1}), PixIcon("t/delete", str_delete)
        )
        table.data.append([f"{format_string(name)}&nbsp;{editlink}&nbsp;{deletelink}"])
    return render_table(table)


def list_of_customfields(
    fields: list[CustomField],
    strings: StringManager,
    writer: HtmlWriter | None = None,
) -> str:
    """Table of session custom fields with edit and delete icons."""
    return _list_with_actions(
        [(field.id, field.name) for field in fields],
        CUSTOMFIELD_URL,
        "nocustomfields",
        strings,
        writer or HtmlWriter(),
    )


def list_of_sitenotices(
    notices: list[SiteNotice],
    strings: StringManager,
    writer: HtmlWriter | None = None,
) -> str:
    """Table of site notices with edit and delete icons."""
    return _list_with_actions(
        [(notice.id, notice.name) for notice in notices],
        SITENOTICE_URL,
        "nositenotices",
        strings,
        writer or HtmlWriter(),
    )


def _listing_heading_info(listing: str, url: str, identifier: str, strings: StringManager) -> str:
    html = listing
    html += start_tag("p")
    html += link(Url(url, {"id": 0}), strings.get_string(identifier))
    html += end_tag("p")
    return html


# --- Choices ---


def role_choices(roles: list[Role]) -> dict[str, str]:
    """Role id to display name, local name first."""
    return {
        str(role.id): format_string(role.localname or role.name or role.shortname)
        for role in roles
    }


def export_field_choices(
    profile_fields: list[ProfileField],
    strings: StringManager,
) -> dict[str, str | LazyString]:
    choices: dict[str, str | LazyString] = {
        key: LazyString(strings, identifier, "core") for key, identifier in BASIC_EXPORT_FIELDS
    }
    suffix = strings.get_string("customfield", "customfield")
    for field in profile_fields:
        choices[f"profile_field_{field.shortname}"] = f"{format_string(field.name)} ({suffix})"
    return choices


# --- Declaration ---


def declare_settings(
    page: AdminSettingsPage,
    *,
    strings: StringManager,
    roles: list[Role],
    profile_fields: list[ProfileField],
    customfields: list[CustomField],
    sitenotices: list[SiteNotice],
    writer: HtmlWriter | None = None,
) -> AdminSettingsPage:
    """
    Register the face-to-face settings on `page`, in display order.

    Args:
        page: Settings page to populate.
        strings: String lookup.
        roles: Roles offered as session roles.
        profile_fields: Custom user profile fields offered for export.
        customfields: Session custom fields listed under their heading.
        sitenotices: Site notices listed under their heading.
        writer: Optional HTML writer (icon base URL).

    Returns:
        The populated page.
    """
    writer = writer or HtmlWriter()

    def s(identifier: str) -> str:
        return strings.get_string(identifier, COMPONENT)

    page.add(ConfigText(
        "facetoface/fromaddress",
        s("setting:fromaddress_caption"),
        s("setting:fromaddress"),
        default=s("setting:fromaddressdefault"),
        paramtype=PARAM_EMAIL,
        size=30,
    ))

    page.add(ConfigMultiSelect(
        "facetoface/session_roles",
        s("setting:sessionroles_caption"),
        s("setting:sessionroles"),
        default=[],
        choices=role_choices(roles),
    ))

    page.add(ConfigCheckbox(
        "facetoface/limit_candidates",
        s("setting:limit_candidates_caption"),
        s("setting:limit_candidates"),
        default=0,
    ))

    page.add(ConfigCheckbox(
        "facetoface/enableapprovals",
        s("setting:enableapprovals_caption"),
        s("setting:enableapprovals"),
        default=1,
    ))

    page.add(Heading(
        "facetoface/manageremail_header",
        s("manageremailheading"),
        s("manageremaildisabled"),
    ))

    page.add(ConfigCheckbox(
        "facetoface/addchangemanageremail",
        s("setting:addchangemanageremail_caption"),
        s("setting:addchangemanageremail"),
        default=0,
    ))
    page.hide_if("facetoface/addchangemanageremail", "facetoface/enableapprovals")

    page.add(ConfigText(
        "facetoface/manageraddressformat",
        s("setting:manageraddressformat_caption"),
        s("setting:manageraddressformat"),
        default=s("setting:manageraddressformatdefault"),
        paramtype=PARAM_TEXT,
    ))
    page.hide_if("facetoface/manageraddressformat", "facetoface/enableapprovals")

    page.add(ConfigText(
        "facetoface/manageraddressformatreadable",
        s("setting:manageraddressformatreadable_caption"),
        s("setting:manageraddressformatreadable"),
        default=s("setting:manageraddressformatreadabledefault"),
        paramtype=PARAM_NOTAGS,
    ))
    page.hide_if("facetoface/manageraddressformatreadable", "facetoface/enableapprovals")

    page.add(Heading("facetoface/cost_header", s("costheading"), ""))

    page.add(ConfigCheckbox(
        "facetoface/hidecost",
        s("setting:hidecost_caption"),
        s("setting:hidecost"),
        default=0,
    ))

    page.add(ConfigCheckbox(
        "facetoface/hidediscount",
        s("setting:hidediscount_caption"),
        s("setting:hidediscount"),
        default=0,
    ))

    page.add(Heading("facetoface/icalendar_header", s("icalendarheading"), ""))

    page.add(ConfigCheckbox(
        "facetoface/oneemailperday",
        s("setting:oneemailperday_caption"),
        s("setting:oneemailperday"),
        default=0,
    ))

    page.add(ConfigCheckbox(
        "facetoface/disableicalcancel",
        s("setting:disableicalcancel_caption"),
        s("setting:disableicalcancel"),
        default=0,
    ))

    # User fields that may be added to the attendees export
    page.add(Heading(
        "facetoface_attendeesexporttofile_header",
        s("attendeesexporttofileheading"),
        "",
    ))

    page.add(ConfigMultiSelect(
        "facetoface_attendeesexportfields",
        LazyString(strings, "setting:attendeesexportfields_caption", COMPONENT),
        LazyString(strings, "setting:attendeesexportfields", COMPONENT),
        default=[],
        choices=export_field_choices(profile_fields, strings),
    ))

    page.add(Heading(
        "facetoface/customfields_header",
        s("customfieldsheading"),
        _listing_heading_info(
            list_of_customfields(customfields, strings, writer),
            CUSTOMFIELD_URL,
            "addnewfieldlink",
            strings,
        ),
    ))

    page.add(Heading(
        "facetoface/sitenotices_header",
        s("sitenoticesheading"),
        _listing_heading_info(
            list_of_sitenotices(sitenotices, strings, writer),
            SITENOTICE_URL,
            "addnewnoticelink",
            strings,
        ),
    ))

    return page


def build_settings_page(
    *,
    strings: StringManager,
    roles: list[Role],
    profile_fields: list[ProfileField],
    customfields: list[CustomField],
    sitenotices: list[SiteNotice],
    writer: HtmlWriter | None = None,
) -> AdminSettingsPage:
    """Create the "modsettingfacetoface" page and declare every setting on it."""
    page = AdminSettingsPage("modsettingfacetoface", "Face-to-face")
    return declare_settings(
        page,
        strings=strings,
        roles=roles,
        profile_fields=profile_fields,
        customfields=customfields,
        sitenotices=sitenotices,
        writer=writer,
    )
