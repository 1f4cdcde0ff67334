# File: config/settings_jazzmin.py
# Version: 1.1.0
# Modified: 2026-10-19

from .settings import UNIHANKO_CODENAME, UNIHANKO_VERSION

JAZZMIN_SETTINGS = {
    # Branding
    "site_title": "UniHanko Timesheets",
    "site_header": "UniHanko Timesheets",
    "site_brand": "UniHanko",
    "welcome_sign": f'Welcome to UniHanko Timesheets v{UNIHANKO_VERSION} "{UNIHANKO_CODENAME}"',
    "copyright": f'UniHanko Timesheets {UNIHANKO_VERSION} ',
    "site_logo_classes": "img-fluid",

    "usermenu_links": [
        {"model": "auth.user"},
    ],
    "search_model": ["people.Person", "timesheets.TimesheetVersion"],
    "icons": {
        # People - directory and supervisor tree
        "people": "fa-solid fa-users",
        "people.person": "fa-solid fa-user",

        # Timesheets
        "timesheets": "fa-solid fa-clock",
        "timesheets.timesheetversion": "fa-solid fa-calendar-check",
        "timesheets.dayentry": "fa-solid fa-stopwatch",
        "timesheets.workinghourspreset": "fa-solid fa-sliders",

        # Django built-ins
        "auth": "fa-solid fa-shield-halved",
        "auth.user": "fa-solid fa-user-lock",
        "auth.group": "fa-solid fa-users-rectangle",
    },

    # Timesheets: Version > [DayEntry] > Preset, then People, then built-ins
    "order_with_respect_to": [
        "timesheets",
        "timesheets.timesheetversion",
        "timesheets.dayentry",
        "timesheets.workinghourspreset",
        "people",
        "people.person",
        "auth",
        "auth.user",
        "auth.group",
    ],

    # Hide historical models from menu
    "hide_models": [
        "people.historicalperson",
        "timesheets.historicaltimesheetversion",
        "timesheets.historicaldayentry",
    ],

    "related_modal_active": True,
    "changeform_format": "collapsible",
    "language_chooser": False,
    "show_ui_builder": False,
}

JAZZMIN_UI_TWEAKS = {
    "theme": "darkly",
    "dark_mode_theme": "darkly",
    "navbar": "navbar-dark",
    "no_navbar_border": True,
    "footer_small_text": True,
    "footer_fixed": True,
    "sidebar_fixed": True,
    "accent": "accent-orange",
    "sidebar": "sidebar-dark-orange",
    "sidebar_nav_small_text": True,
    "sidebar_nav_child_indent": True,
    "sidebar_nav_compact_style": True,
    "sidebar_nav_flat_style": True,
    "actions_sticky_top": True,
}
