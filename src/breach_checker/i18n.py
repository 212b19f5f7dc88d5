"""
Internationalization (i18n) module for the breach checker.

Provides translations for all user-facing messages in English (en) and
German (de).
"""

from typing import Optional


# Supported languages
SUPPORTED_LANGUAGES = frozenset({"en", "de"})
DEFAULT_LANGUAGE = "en"


# Structure: {message_key: {language_code: translated_message}}
TRANSLATIONS: dict[str, dict[str, str]] = {
    "app.title": {
        "en": "Is this password in a data breach?",
        "de": "Ist dieses Passwort in einem Datenleck?",
    },
    "digest.label": {
        "en": "SHA-1: {digest}",
        "de": "SHA-1: {digest}",
    },
    "digest.prefix_label": {
        "en": "Sent to server: {prefix}",
        "de": "An den Server gesendet: {prefix}",
    },

    # Outcome messages
    "outcome.not_submitted": {
        "en": "",
        "de": "",
    },
    "outcome.searching": {
        "en": "Searching...",
        "de": "Suche läuft...",
    },
    "outcome.safe": {
        "en": "No breaches using this password! It seems this password is safe to use.",
        "de": "Keine Datenlecks mit diesem Passwort! Dieses Passwort scheint sicher zu sein.",
    },
    "outcome.breached": {
        "en": (
            "This password has been found {occurrences} time(s) across {sites} website(s)\n"
            "You should not use this password!"
        ),
        "de": (
            "Dieses Passwort wurde {occurrences} Mal auf {sites} Website(s) gefunden\n"
            "Sie sollten dieses Passwort nicht verwenden!"
        ),
    },
    "outcome.simulated": {
        "en": (
            "Simulated lookup: no match in the offline sample data.\n"
            "This password was NOT checked against the breach index."
        ),
        "de": (
            "Simulierte Abfrage: kein Treffer in den Offline-Beispieldaten.\n"
            "Dieses Passwort wurde NICHT mit dem Datenleck-Index abgeglichen."
        ),
    },
    "outcome.failed": {
        "en": "Error: {error}",
        "de": "Fehler: {error}",
    },

    # CLI messages
    "cli.password_prompt": {
        "en": "Password: ",
        "de": "Passwort: ",
    },
    "cli.empty_password": {
        "en": "No password given",
        "de": "Kein Passwort angegeben",
    },
    "cli.interactive_help": {
        "en": "Enter a password to check it. ':show' / ':hide' toggle display, empty line quits.",
        "de": "Passwort eingeben, um es zu prüfen. ':show' / ':hide' schalten die Anzeige um, leere Zeile beendet.",
    },
    "cli.password_label": {
        "en": "Password: {password}",
        "de": "Passwort: {password}",
    },

    # Simulation mode
    "simulation.enabled": {
        "en": "Simulation mode enabled - no network requests are made",
        "de": "Simulationsmodus aktiviert - es werden keine Netzwerkanfragen gesendet",
    },

    # Self-test messages
    "selftest.starting": {
        "en": "Running self-test...",
        "de": "Selbsttest wird ausgeführt...",
    },
    "selftest.config_valid": {
        "en": "Configuration is valid",
        "de": "Konfiguration ist gültig",
    },
    "selftest.config_invalid": {
        "en": "Configuration is invalid",
        "de": "Konfiguration ist ungültig",
    },
    "selftest.endpoint_ok": {
        "en": "Endpoint reachable: {endpoint} ({time_ms:.0f}ms)",
        "de": "Endpunkt erreichbar: {endpoint} ({time_ms:.0f}ms)",
    },
    "selftest.endpoint_failed": {
        "en": "Endpoint unreachable: {endpoint} - {error}",
        "de": "Endpunkt nicht erreichbar: {endpoint} - {error}",
    },
    "selftest.skipped_simulation": {
        "en": "Connectivity test skipped in simulation mode",
        "de": "Verbindungstest im Simulationsmodus übersprungen",
    },
    "selftest.passed": {
        "en": "Self-test passed",
        "de": "Selbsttest bestanden",
    },
    "selftest.failed": {
        "en": "Self-test failed",
        "de": "Selbsttest fehlgeschlagen",
    },
}


def get_message(key: str, language: Optional[str] = None, **kwargs) -> str:
    """
    Get a translated message by key.

    Falls back to the default language when the requested one is missing,
    and to the key itself when the key is unknown.

    Args:
        key: The message key
        language: Language code ('en' or 'de'); defaults to DEFAULT_LANGUAGE
        **kwargs: Format arguments for the message

    Returns:
        The translated, formatted message
    """
    if language is None or language not in SUPPORTED_LANGUAGES:
        language = DEFAULT_LANGUAGE

    translations = TRANSLATIONS.get(key)
    if translations is None:
        return key

    message = translations.get(language)
    if message is None:
        message = translations.get(DEFAULT_LANGUAGE)

    if message is None:
        return key

    if kwargs:
        try:
            message = message.format(**kwargs)
        except (KeyError, ValueError):
            pass

    return message


def get_all_message_keys() -> set[str]:
    return set(TRANSLATIONS.keys())


def get_missing_translations(language: str) -> set[str]:
    """Get all message keys that have no translation for a language."""
    return {key for key, translations in TRANSLATIONS.items() if language not in translations}


def validate_translations() -> dict[str, set[str]]:
    """
    Validate that all languages have all translations.

    Returns:
        Mapping of language code to missing keys; empty sets mean complete.
    """
    return {language: get_missing_translations(language) for language in SUPPORTED_LANGUAGES}
