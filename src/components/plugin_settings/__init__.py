"""
Plugin settings component - Admin settings declaration and configuration.
"""

from ._impl import (
    AdminSettingsPage,
    PluginConfigService,
    clean_param,
    validate_email,
    write_setting,
)
from .component import (
    BASIC_EXPORT_FIELDS,
    build_settings_page,
    declare_settings,
    export_field_choices,
    list_of_customfields,
    list_of_sitenotices,
    role_choices,
)
from .models import (
    PARAM_EMAIL,
    PARAM_INT,
    PARAM_NOTAGS,
    PARAM_RAW,
    PARAM_TEXT,
    AdminSetting,
    ConfigCheckbox,
    ConfigMultiSelect,
    ConfigText,
    DuplicateSettingError,
    Heading,
    HideIfRule,
    SettingValidationError,
    SettingView,
    UnknownSettingError,
)
from .ports import (
    ConfigRepoPort,
    CustomFieldProviderPort,
    ProfileFieldProviderPort,
    RoleProviderPort,
    SiteNoticeProviderPort,
)

__all__ = [
    # Declaration
    "build_settings_page",
    "declare_settings",
    "list_of_customfields",
    "list_of_sitenotices",
    "role_choices",
    "export_field_choices",
    "BASIC_EXPORT_FIELDS",
    # Registry and service
    "AdminSettingsPage",
    "PluginConfigService",
    "clean_param",
    "validate_email",
    "write_setting",
    # Models
    "AdminSetting",
    "ConfigCheckbox",
    "ConfigMultiSelect",
    "ConfigText",
    "Heading",
    "HideIfRule",
    "SettingValidationError",
    "SettingView",
    "DuplicateSettingError",
    "UnknownSettingError",
    "PARAM_EMAIL",
    "PARAM_INT",
    "PARAM_NOTAGS",
    "PARAM_RAW",
    "PARAM_TEXT",
    # Ports
    "ConfigRepoPort",
    "CustomFieldProviderPort",
    "ProfileFieldProviderPort",
    "RoleProviderPort",
    "SiteNoticeProviderPort",
]
