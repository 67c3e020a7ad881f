"""
Localized SMS alert texts for detected risks.
"""
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple, Union

from agroguard.models.risk import Language, RiskAssessment, RiskType
from agroguard.risk.detector import is_near_location
from agroguard.utils.logger import get_logger


DEFAULT_LANGUAGE = Language.ENGLISH

# language -> risk type -> (lead-in, call to action)
ALERT_TEMPLATES: Dict[str, Dict[RiskType, Tuple[str, str]]] = {
    Language.ENGLISH.value: {
        RiskType.DROUGHT: (
            "DROUGHT ALERT:",
            "Please consider supplementary irrigation and water conservation measures.",
        ),
        RiskType.FLOOD: (
            "FLOOD WARNING:",
            "Ensure proper drainage and move equipment to higher ground.",
        ),
        RiskType.PEST: (
            "PEST RISK ALERT:",
            "Monitor crops closely and consider preventive pest control measures.",
        ),
    },
    Language.SPANISH.value: {
        RiskType.DROUGHT: (
            "ALERTA DE SEQUIA:",
            "Por favor considere riego suplementario y medidas de conservacion de agua.",
        ),
        RiskType.FLOOD: (
            "ALERTA DE INUNDACION:",
            "Asegure un drenaje adecuado y mueva equipos a terreno mas alto.",
        ),
        RiskType.PEST: (
            "ALERTA DE PLAGAS:",
            "Monitoree los cultivos de cerca y considere medidas preventivas de control de plagas.",
        ),
    },
    Language.HINDI.value: {
        RiskType.DROUGHT: (
            "सूखा चेतावनी:",
            "कृपया पूरक सिंचाई और जल संरक्षण उपायों पर विचार करें।",
        ),
        RiskType.FLOOD: (
            "बाढ़ चेतावनी:",
            "उचित जल निकासी सुनिश्चित करें और उपकरण को ऊंची जमीन पर ले जाएं।",
        ),
        RiskType.PEST: (
            "कीट जोखिम चेतावनी:",
            "फसलों की बारीकी से निगरानी करें और निवारक कीट नियंत्रण उपायों पर विचार करें।",
        ),
    },
}


class AlertDraft(NamedTuple):
    """Message ready to hand to an SMS transport."""
    farmer: Any
    assessment: RiskAssessment
    language: str
    message: str


def _normalize(language: Any) -> Optional[str]:
    code = getattr(language, "value", language)
    return code.strip().lower() if isinstance(code, str) else None


def is_supported_language(language: Union[Language, str, None]) -> bool:
    return _normalize(language) in ALERT_TEMPLATES


def resolve_language(language: Union[Language, str, None]) -> str:
    """
    Map a language value to a supported template language code.

    Unknown or missing languages resolve to English.
    """
    if is_supported_language(language):
        return _normalize(language)
    return DEFAULT_LANGUAGE.value


def compose_message(
    risk_type: Union[RiskType, str],
    description: str,
    language: Union[Language, str, None] = DEFAULT_LANGUAGE
) -> str:
    """
    Build the alert text for a risk.

    Args:
        risk_type: Risk category (a plain string must be a valid RiskType value)
        description: Risk description, embedded verbatim
        language: Language code; unknown codes fall back to English

    Returns:
        Localized alert message

    Raises:
        ValueError: If risk_type is not a RiskType value
    """
    risk_type = RiskType(risk_type)
    lead_in, call_to_action = ALERT_TEMPLATES[resolve_language(language)][risk_type]
    return f"{lead_in} {description}. {call_to_action}"


class AlertComposer:
    """Composes localized alert messages for assessments and farmer rosters."""

    def __init__(self, logger=None):
        """
        Initialize alert composer

        Args:
            logger: Logger instance
        """
        self.logger = logger or get_logger("agroguard.alerts")

    def compose_message(
        self,
        risk_type: Union[RiskType, str],
        description: str,
        language: Union[Language, str, None] = DEFAULT_LANGUAGE
    ) -> str:
        if not is_supported_language(language):
            self.logger.debug(f"No templates for language {language!r}, using English")
        return compose_message(risk_type, description, language)

    def compose_for_assessment(
        self,
        assessment: RiskAssessment,
        language: Union[Language, str, None] = DEFAULT_LANGUAGE
    ) -> str:
        return self.compose_message(assessment.type, assessment.description, language)

    def compose_for_roster(
        self,
        assessments: Iterable[RiskAssessment],
        roster: Iterable[Any],
        latitude: float,
        longitude: float
    ) -> List[AlertDraft]:
        """
        Draft one message per nearby farmer and assessment.

        Args:
            assessments: Detected risks for the location
            roster: Farmer entries with latitude, longitude and language
            latitude: Latitude the assessments were detected for
            longitude: Longitude the assessments were detected for

        Returns:
            Drafts grouped by farmer, in roster order
        """
        assessments = list(assessments)
        drafts = []
        for farmer in roster:
            if isinstance(farmer, dict):
                farmer_lat, farmer_lon = farmer["latitude"], farmer["longitude"]
                language = farmer.get("language")
            else:
                farmer_lat, farmer_lon = farmer.latitude, farmer.longitude
                language = getattr(farmer, "language", None)

            if not is_near_location(farmer_lat, farmer_lon, latitude, longitude):
                continue

            code = resolve_language(language)
            for assessment in assessments:
                drafts.append(AlertDraft(
                    farmer=farmer,
                    assessment=assessment,
                    language=code,
                    message=compose_message(assessment.type, assessment.description, code),
                ))

        self.logger.debug(f"Drafted {len(drafts)} alert(s) for {len(assessments)} risk(s)")
        return drafts
