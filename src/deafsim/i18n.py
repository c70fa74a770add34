"""Interface strings for the shell and clinical level descriptions."""

from dataclasses import dataclass

from deafsim.language import resolve_language


@dataclass(frozen=True)
class UIStrings:
    """Localized labels used by the interactive shell."""

    welcome: str
    config_title: str
    api_endpoint: str
    model: str
    deaf_level: str
    language: str
    system_prompt: str
    configured: str
    none: str
    commands: str
    cmd_exit: str
    cmd_models: str
    cmd_level: str
    cmd_lang: str
    cmd_help: str
    cmd_clear: str
    prompt_label: str
    degraded_prompt: str
    loss_percentage: str
    response: str
    error: str
    models_available: str
    no_models: str
    model_changed: str
    level_changed: str
    lang_changed: str
    invalid_level: str
    invalid_lang: str
    unknown_command: str
    goodbye: str
    select_model: str


_STRINGS = {
    "english": UIStrings(
        welcome="DeafAI - Deaf Simulator for LLMs",
        config_title="Configuration",
        api_endpoint="API Endpoint",
        model="Model",
        deaf_level="Deaf Level",
        language="Language",
        system_prompt="System Prompt",
        configured="configured",
        none="none",
        commands="Commands",
        cmd_exit="/exit, /quit - Exit the program",
        cmd_models="/models - List available models",
        cmd_level="/level <1-10> - Change hearing loss level",
        cmd_lang="/lang <en|it|agnostic> - Change language",
        cmd_help="/help - Show this help",
        cmd_clear="/clear - Clear screen",
        prompt_label="You",
        degraded_prompt="What the AI heard",
        loss_percentage="Signal loss",
        response="AI Response",
        error="Error",
        models_available="Available models",
        no_models="No models found or model discovery not supported",
        model_changed="Model changed to",
        level_changed="Hearing loss level changed to",
        lang_changed="Language changed to",
        invalid_level="Invalid level. Use a number between 1 and 10",
        invalid_lang="Invalid language. Use: en, it, or agnostic",
        unknown_command="Unknown command. Type /help for available commands.",
        goodbye="Goodbye!",
        select_model="Select a model (number or name)",
    ),
    "italian": UIStrings(
        welcome="DeafAI - Simulatore di Sordità per LLM",
        config_title="Configurazione",
        api_endpoint="Endpoint API",
        model="Modello",
        deaf_level="Livello Sordità",
        language="Lingua",
        system_prompt="Prompt di sistema",
        configured="configurato",
        none="nessuno",
        commands="Comandi",
        cmd_exit="/exit, /quit - Esci dal programma",
        cmd_models="/models - Elenca modelli disponibili",
        cmd_level="/level <1-10> - Cambia livello di perdita uditiva",
        cmd_lang="/lang <en|it|agnostic> - Cambia lingua",
        cmd_help="/help - Mostra questa guida",
        cmd_clear="/clear - Pulisci schermo",
        prompt_label="Tu",
        degraded_prompt="Cosa ha sentito la AI",
        loss_percentage="Perdita del segnale",
        response="Risposta AI",
        error="Errore",
        models_available="Modelli disponibili",
        no_models="Nessun modello trovato o scoperta modelli non supportata",
        model_changed="Modello cambiato in",
        level_changed="Livello perdita uditiva cambiato a",
        lang_changed="Lingua cambiata in",
        invalid_level="Livello non valido. Usa un numero tra 1 e 10",
        invalid_lang="Lingua non valida. Usa: en, it, o agnostic",
        unknown_command="Comando sconosciuto. Digita /help per i comandi disponibili.",
        goodbye="Arrivederci!",
        select_model="Seleziona un modello (numero o nome)",
    ),
    "agnostic": UIStrings(
        welcome="DeafAI - Deaf Simulator for LLMs / Simulatore di Sordità per LLM",
        config_title="Configuration / Configurazione",
        api_endpoint="API Endpoint",
        model="Model / Modello",
        deaf_level="Deaf Level / Livello Sordità",
        language="Language / Lingua",
        system_prompt="System Prompt / Prompt di sistema",
        configured="configured / configurato",
        none="none / nessuno",
        commands="Commands / Comandi",
        cmd_exit="/exit, /quit - Exit / Esci",
        cmd_models="/models - List models / Elenca modelli",
        cmd_level="/level <1-10> - Change level / Cambia livello",
        cmd_lang="/lang <en|it|agnostic> - Change language / Cambia lingua",
        cmd_help="/help - Show help / Mostra guida",
        cmd_clear="/clear - Clear screen / Pulisci schermo",
        prompt_label="You / Tu",
        degraded_prompt="What AI heard / Cosa ha sentito la AI",
        loss_percentage="Signal loss / Perdita segnale",
        response="AI Response / Risposta AI",
        error="Error / Errore",
        models_available="Available models / Modelli disponibili",
        no_models="No models found / Nessun modello trovato",
        model_changed="Model changed to / Modello cambiato in",
        level_changed="Level changed to / Livello cambiato a",
        lang_changed="Language changed to / Lingua cambiata in",
        invalid_level="Invalid level (1-10) / Livello non valido (1-10)",
        invalid_lang="Invalid language: en, it, agnostic",
        unknown_command="Unknown command / Comando sconosciuto (/help)",
        goodbye="Goodbye! / Arrivederci!",
        select_model="Select model / Seleziona modello",
    ),
}

# Clinical wording per level, ~N% = expected word recognition
_LEVEL_DESCRIPTIONS = {
    "english": [
        "Normal hearing (~97%)",
        "Slight loss (~92%)",
        "Mild loss (~85%)",
        "Mild loss (~78%)",
        "Moderate loss (~70%)",
        "Moderate loss (~60%)",
        "Moderately severe (~45%)",
        "Severe loss (~30%)",
        "Severe loss (~18%)",
        "Profound loss (~8%)",
    ],
    "italian": [
        "Udito normale (~97%)",
        "Perdita lieve (~92%)",
        "Perdita lieve (~85%)",
        "Perdita lieve (~78%)",
        "Perdita moderata (~70%)",
        "Perdita moderata (~60%)",
        "Moderatamente grave (~45%)",
        "Perdita grave (~30%)",
        "Perdita grave (~18%)",
        "Perdita profonda (~8%)",
    ],
    "agnostic": [
        "Normal / Normale (~97%)",
        "Slight / Lieve (~92%)",
        "Mild / Lieve (~85%)",
        "Mild / Lieve (~78%)",
        "Moderate / Moderata (~70%)",
        "Moderate / Moderata (~60%)",
        "Mod-Severe / Mod-Grave (~45%)",
        "Severe / Grave (~30%)",
        "Severe / Grave (~18%)",
        "Profound / Profonda (~8%)",
    ],
}

_LANGUAGE_LABELS = {
    "english": "English",
    "italian": "Italiano",
    "agnostic": "Language Agnostic",
}


def get_strings(language: str) -> UIStrings:
    return _STRINGS[resolve_language(language)]


def level_description(level: int, language: str) -> str:
    """Clinical description of a hearing loss level (clamped to 1-10)."""
    descriptions = _LEVEL_DESCRIPTIONS[resolve_language(language)]
    index = max(1, min(len(descriptions), level)) - 1
    return descriptions[index]


def language_label(language: str) -> str:
    return _LANGUAGE_LABELS[resolve_language(language)]
