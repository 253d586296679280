"""Static health tips and public health information.

The catalogue is read-only and shared across requests; callers receive
copies so nothing can mutate it in place.
"""

from __future__ import annotations

import random
from typing import List, Optional

from wellness.schemas import HealthTip, PublicContent

_PUBLISHED = "2024-01-01T00:00:00.000Z"

HEALTH_TIPS: List[HealthTip] = [
    HealthTip(
        id="1",
        tip="Stay hydrated! Aim to drink at least 8 glasses of water per day for optimal health.",
        category="hydration",
        icon="droplets",
    ),
    HealthTip(
        id="2",
        tip="Take a 5-minute stretch break every hour to reduce muscle tension and improve circulation.",
        category="exercise",
        icon="activity",
    ),
    HealthTip(
        id="3",
        tip="Prioritize sleep! Adults need 7-9 hours of quality sleep for optimal health and cognitive function.",
        category="sleep",
        icon="moon",
    ),
    HealthTip(
        id="4",
        tip="Add more colorful vegetables to your plate. Different colors provide different nutrients.",
        category="nutrition",
        icon="apple",
    ),
    HealthTip(
        id="5",
        tip="Practice deep breathing for 5 minutes daily to reduce stress and improve mental clarity.",
        category="mental-health",
        icon="brain",
    ),
]


def _topic(
    topic_id: str,
    title: str,
    summary: str,
    category: str,
    points: List[str],
    tags: List[str],
) -> PublicContent:
    return PublicContent(
        id=topic_id,
        title=title,
        summary=summary,
        body="\n".join(points),
        category=category,
        tags=tags,
        published_at=_PUBLISHED,
        updated_at=_PUBLISHED,
    )


PUBLIC_CONTENT: List[PublicContent] = [
    _topic(
        "covid",
        "COVID-19 Updates",
        "Stay informed about the latest COVID-19 guidelines and vaccination information.",
        "covid",
        [
            "Get vaccinated and boosted as recommended by health authorities.",
            "Stay home when sick and get tested if you have symptoms.",
            "Wash hands frequently with soap and water for at least 20 seconds.",
            "Wear a mask in crowded indoor settings, especially if immunocompromised.",
            "Improve ventilation in indoor spaces when possible.",
            "Monitor local COVID-19 levels and adjust precautions accordingly.",
        ],
        ["vaccination", "prevention"],
    ),
    _topic(
        "flu",
        "Seasonal Flu Prevention",
        "Learn steps to prevent seasonal flu and when to get vaccinated.",
        "flu",
        [
            "Get your annual flu vaccine, ideally before flu season peaks.",
            "Avoid close contact with people who are sick.",
            "Cover your mouth and nose when coughing or sneezing.",
            "Clean and disinfect frequently touched surfaces.",
            "Stay hydrated and get adequate sleep to support your immune system.",
            "Consider antiviral medications if prescribed by your doctor.",
        ],
        ["vaccination", "prevention"],
    ),
    _topic(
        "mental-health",
        "Mental Health Awareness",
        "Explore resources and support options for maintaining good mental health.",
        "mental-health",
        [
            "Practice mindfulness and meditation for stress reduction.",
            "Maintain regular sleep schedules for better mental health.",
            "Stay connected with friends and family for social support.",
            "Exercise regularly; physical activity boosts mood and reduces anxiety.",
            "Seek professional help if experiencing persistent symptoms.",
            "Take breaks from news and social media when feeling overwhelmed.",
        ],
        ["wellness", "support"],
    ),
    _topic(
        "nutrition",
        "Healthy Nutrition",
        "Discover balanced eating habits for optimal health and energy.",
        "nutrition",
        [
            "Eat a variety of fruits and vegetables daily.",
            "Choose whole grains over refined grains.",
            "Limit processed foods, added sugars, and sodium.",
            "Stay hydrated and aim for 8 glasses of water per day.",
            "Include lean proteins and healthy fats in your diet.",
            "Practice portion control and mindful eating.",
        ],
        ["lifestyle"],
    ),
    _topic(
        "exercise",
        "Physical Activity",
        "Guidelines for staying active and maintaining physical fitness.",
        "exercise",
        [
            "Aim for 150 minutes of moderate aerobic activity per week.",
            "Include strength training exercises at least 2 days per week.",
            "Take regular breaks from sitting and move every hour.",
            "Find activities you enjoy to make exercise sustainable.",
            "Start slowly and gradually increase intensity.",
            "Listen to your body and rest when needed.",
        ],
        ["fitness"],
    ),
    _topic(
        "heart-health",
        "Heart Health",
        "Tips for maintaining a healthy heart and cardiovascular system.",
        "other",
        [
            "Monitor blood pressure regularly and keep it in healthy range.",
            "Maintain healthy cholesterol levels through diet and exercise.",
            "Quit smoking and avoid secondhand smoke.",
            "Manage stress through relaxation techniques.",
            "Get regular health screenings as recommended.",
            "Maintain a healthy weight through balanced lifestyle.",
        ],
        ["prevention", "cardiology"],
    ),
]


def random_health_tip(rng: Optional[random.Random] = None) -> HealthTip:
    """Return one health tip chosen uniformly at random."""

    chooser = rng or random
    return chooser.choice(HEALTH_TIPS).model_copy()


def public_content() -> List[PublicContent]:
    return [item.model_copy(deep=True) for item in PUBLIC_CONTENT]


__all__ = ["HEALTH_TIPS", "PUBLIC_CONTENT", "public_content", "random_health_tip"]
