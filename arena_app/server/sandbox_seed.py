"""Sample question bank and tournaments for the sandbox API."""

from __future__ import annotations

QUESTION_BANK: dict[str, list[tuple[str, list[str], str]]] = {
    "General Knowledge": [
        ("How many continents are there?", ["5", "6", "7", "8"], "7"),
        ("Which planet is known as the *Red Planet*?", ["Venus", "Mars", "Jupiter", "Mercury"], "Mars"),
        ("What is the largest ocean on Earth?", ["Atlantic", "Indian", "Arctic", "Pacific"], "Pacific"),
        ("How many sides does a hexagon have?", ["5", "6", "7", "8"], "6"),
        ("Which language has the most native speakers?", ["English", "Hindi", "Spanish", "Mandarin Chinese"], "Mandarin Chinese"),
    ],
    "Science & Nature": [
        ("What is the chemical symbol for gold?", ["Ag", "Au", "Gd", "Go"], "Au"),
        ("What gas do plants absorb from the atmosphere?", ["Oxygen", "Nitrogen", "Carbon dioxide", "Helium"], "Carbon dioxide"),
        ("What is the hardest natural substance?", ["Quartz", "Diamond", "Granite", "Topaz"], "Diamond"),
        ("How many bones are in the adult human body?", ["186", "206", "226", "246"], "206"),
        ("What is `H2O` more commonly known as?", ["Salt", "Water", "Hydrogen peroxide", "Ammonia"], "Water"),
    ],
    "History": [
        ("In which year did World War II end?", ["1943", "1944", "1945", "1946"], "1945"),
        ("Who was the first President of the United States?", ["John Adams", "Thomas Jefferson", "George Washington", "Abraham Lincoln"], "George Washington"),
        ("Which empire built Machu Picchu?", ["Aztec", "Maya", "Inca", "Olmec"], "Inca"),
        ("The Berlin Wall fell in which year?", ["1987", "1989", "1991", "1993"], "1989"),
        ("Which ancient wonder stood in Alexandria?", ["Colossus", "Lighthouse", "Hanging Gardens", "Mausoleum"], "Lighthouse"),
    ],
    "Geography": [
        ("What is the capital of Australia?", ["Sydney", "Melbourne", "Canberra", "Perth"], "Canberra"),
        ("Which river is the longest in the world?", ["Amazon", "Nile", "Yangtze", "Mississippi"], "Nile"),
        ("Mount Kilimanjaro is located in which country?", ["Kenya", "Tanzania", "Uganda", "Ethiopia"], "Tanzania"),
        ("Which country has the most islands?", ["Indonesia", "Philippines", "Sweden", "Canada"], "Sweden"),
        ("What is the smallest country by area?", ["Monaco", "Vatican City", "San Marino", "Malta"], "Vatican City"),
    ],
}

# (name, category, difficulty, start offset hours, end offset hours, passing score)
SAMPLE_TOURNAMENTS: list[tuple[str, str, str, float, float, int | None]] = [
    ("Morning Brain Teasers", "General Knowledge", "easy", -1, 48, 70),
    ("Science Sprint", "Science & Nature", "medium", -2, 24, 60),
    ("History Masters", "History", "hard", 24, 72, 80),
    ("World Explorer Cup", "Geography", "medium", -120, -72, None),
]

SAMPLE_USERS: list[tuple[str, str, str, str]] = [
    ("admin", "admin@quizarena.local", "Admin123", "admin"),
    ("player", "player@quizarena.local", "Player123", "player"),
]
