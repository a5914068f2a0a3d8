"""
Prompt templates for pixel art generation.

Each generation attempt picks a random kid-friendly subject
(adjective + noun + action) so consecutive puzzles stay varied.
"""

import random
from dataclasses import dataclass
from typing import Optional

KID_ADJECTIVES = [
    "happy", "silly", "bouncy", "sparkly", "fluffy", "tiny", "brave", "sleepy", "colorful", "friendly",
    "fast", "shiny", "round", "grumpy", "giggly", "wobbly", "fuzzy", "bright", "gentle", "playful",
    "curious", "magic", "hidden", "lost", "found", "striped", "spotted", "dancing", "singing", "dreamy",
    "zany", "goofy", "jolly", "peaceful", "calm", "excited", "eager", "proud", "clever", "lucky",
    "chubby", "skinny", "tall", "short", "strong", "weak", "quiet", "loud", "smooth", "rough",
]

KID_NOUNS = [
    "puppy", "kitten", "robot", "dinosaur", "teddy bear", "butterfly", "rocket", "castle", "flower", "star",
    "car", "train", "boat", "fish", "bird", "monster", "alien", "tree", "house", "rainbow",
    "unicorn", "dragon", "fairy", "gnome", "pirate", "superhero", "cupcake", "ice cream", "pizza", "balloon",
    "present", "cloud", "sun", "moon", "planet", "bug", "frog", "mouse", "duck", "pony",
    "bear", "lion", "tiger", "elephant", "monkey", "turtle", "snake", "spider", "worm", "ant",
    "ball", "kite", "drum", "guitar", "book", "pencil", "eraser", "crayon", "game", "puzzle",
]

KID_ACTIONS = [
    "jumping", "flying", "dancing", "sleeping", "playing", "sparkling", "splashing", "rolling", "waving", "smiling",
    "running", "floating", "shining", "crumbling", "hopping", "wiggling", "glowing", "zooming", "spinning", "hiding",
    "sneaking", "munching", "building", "drawing", "reading", "singing", "climbing", "sliding", "swimming", "melting",
    "eating", "drinking", "thinking", "laughing", "crying", "whispering", "shouting", "kicking", "catching", "throwing",
    "hugging", "kissing", "writing", "painting", "coloring", "digging", "planting", "watering", "fishing",
]

JSON_EXAMPLE = '[[0, 1, "#FF0000"], [1, 1, "#00FF00"], [2, 0, "#0000FF"]]'


@dataclass
class Subject:
    """Randomly chosen picture subject."""
    adjective: str
    noun: str
    action: str

    def __str__(self) -> str:
        return f"{self.adjective} {self.noun} {self.action}"


def pick_subject(rng: Optional[random.Random] = None) -> Subject:
    """Draw one adjective, noun and action uniformly at random."""
    rng = rng or random
    return Subject(
        adjective=rng.choice(KID_ADJECTIVES),
        noun=rng.choice(KID_NOUNS),
        action=rng.choice(KID_ACTIONS),
    )


def _percent(value: float) -> str:
    return f"{value * 100:g}"


def build_initial_prompt(rows: int, cols: int, fill_percentage: float, subject: Subject) -> str:
    """Build the first request of a generation attempt."""
    return f"""
Create a fun and colorful {rows}x{cols} pixel art image suitable for a young child (around 7 years old).
The image should clearly show a {subject.adjective} {subject.noun} that is {subject.action}.
Make it vibrant, easy to recognize, and visually appealing for a kid.
Crucially, include some visual effect related to the action (like sparkles, water splashes, speed lines, dust clouds, leaves falling, light rays, etc.).
Also, ensure some pixels (like background noise or effects) are scattered across the grid to minimize completely empty rows or columns. Distribute the pixels well for a good nonogram puzzle.
Use approximately {_percent(fill_percentage)}% pixel fill for the main subject and its effects combined.
Avoid overly simple or abstract shapes like plain hearts, squares, or just letters. Be creative but keep the subject recognizable and kid-friendly!
**Assume the background is white. Only provide coordinates and colors for non-white pixels.**
**Also, please avoid making any row or column completely filled with pixels.**
Describe the image in one simple sentence that a child could understand (e.g., "A happy puppy jumping in puddles."). Do not start with "Pixel art of..." or "This is...". Just give the simple description.
Provide the filled pixels (non-white only) as a JSON array of arrays, with each inner array as [row, column, hex color code] (e.g., "#RRGGBB"). Ensure full 6-digit hex codes and valid JSON format.
Example JSON: {JSON_EXAMPLE}
"""


def build_follow_up_prompt(
    rows: int,
    cols: int,
    fill_percentage: float,
    actual_fill: float,
    description: str,
    subject: Subject,
) -> str:
    """Build the correction request sent when the fill ratio is off target."""
    return f"""
You previously generated an image described as: "{description}" for a {rows}x{cols} grid.
The non-white pixel fill percentage was supposed to be around {_percent(fill_percentage)}% but it was actually {round(actual_fill * 100)}%.
Please adjust the image, keeping the same subject ({subject}) and general appearance, but modify the number of **non-white** filled pixels (especially effects or background noise) to be closer to the target of {_percent(fill_percentage)}%.
**Assume the background is white. Only provide coordinates and colors for non-white pixels.**
**Also ensure that no row or column is completely filled.**
Provide the updated simple description and the corrected JSON array of **non-white** pixels in the same format as before.
Example JSON: {JSON_EXAMPLE}
"""
