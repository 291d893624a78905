"""
Season, time-of-day and weather lookup tables for glass effects.
"""

SEASONS = {
    "spring": {
        "blur": 0.7,
        "opacity": 0.10,
        "saturation": 1.5,
        "particle": "sakura",
        "gradient": ("#ffb3d9", "#98fb98"),
    },
    "summer": {
        "blur": 0.9,
        "opacity": 0.15,
        "saturation": 1.8,
        "particle": "waterdrops",
        "gradient": ("#87ceeb", "#20b2aa"),
    },
    "autumn": {
        "blur": 0.6,
        "opacity": 0.12,
        "saturation": 1.2,
        "particle": "leaves",
        "gradient": ("#ff8c00", "#dc143c"),
    },
    "winter": {
        "blur": 1.0,
        "opacity": 0.18,
        "saturation": 2.0,
        "particle": "snow",
        "gradient": ("#b0e0e6", "#4169e1"),
    },
}

# Blur/opacity grow toward night
TIME_OF_DAY = {
    "morning": {"blur": 0.8, "opacity": 0.9},
    "day":     {"blur": 1.0, "opacity": 1.0},
    "evening": {"blur": 1.1, "opacity": 1.1},
    "night":   {"blur": 1.2, "opacity": 1.2},
}

# particle=None keeps the seasonal default
WEATHER = {
    "sunny":  {"blur": 1.0, "opacity": 1.0, "particle": None,    "speed": 1.0, "overlay": None},
    "cloudy": {"blur": 1.1, "opacity": 1.1, "particle": None,    "speed": 0.7, "overlay": "rgba(128, 128, 128, 0.2)"},
    "foggy":  {"blur": 1.6, "opacity": 1.4, "particle": None,    "speed": 0.3, "overlay": "rgba(200, 200, 200, 0.6)"},
    "rainy":  {"blur": 1.3, "opacity": 1.4, "particle": "rain",  "speed": 1.8, "overlay": "rgba(0, 100, 200, 0.3)"},
    "snowy":  {"blur": 1.4, "opacity": 1.3, "particle": "snow",  "speed": 0.5, "overlay": "rgba(255, 255, 255, 0.4)"},
    "stormy": {"blur": 1.5, "opacity": 1.5, "particle": "storm", "speed": 2.5, "overlay": "rgba(50, 50, 50, 0.5)"},
}

# Standalone weather glass effects (weather layer without season)
WEATHER_GLASS = {
    "sunny":  {"blur": 0.8, "opacity": 0.10, "count": 20,  "particle": "sparkle", "speed": 1.0, "overlay": "rgba(255, 255, 0, 0.1)"},
    "cloudy": {"blur": 1.2, "opacity": 0.15, "count": 40,  "particle": "clouds",  "speed": 0.7, "overlay": "rgba(128, 128, 128, 0.2)"},
    "rainy":  {"blur": 1.6, "opacity": 0.25, "count": 100, "particle": "rain",    "speed": 1.8, "overlay": "rgba(0, 100, 200, 0.3)"},
    "snowy":  {"blur": 1.4, "opacity": 0.20, "count": 80,  "particle": "snow",    "speed": 0.5, "overlay": "rgba(255, 255, 255, 0.4)"},
    "stormy": {"blur": 2.0, "opacity": 0.35, "count": 150, "particle": "storm",   "speed": 2.5, "overlay": "rgba(50, 50, 50, 0.5)"},
    "foggy":  {"blur": 2.2, "opacity": 0.40, "count": 60,  "particle": "fog",     "speed": 0.3, "overlay": "rgba(200, 200, 200, 0.6)"},
}

PARTICLE_COUNTS = {
    "sakura": 50,
    "waterdrops": 30,
    "leaves": 40,
    "snow": 60,
    "rain": 80,
    "clouds": 20,
    "storm": 100,
    "sparkle": 25,
    "fog": 15,
    "none": 0,
}

DEFAULT_PARTICLE_COUNT = 30
