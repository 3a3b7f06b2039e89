# modules/interaction/emotion_texts.py

"""
Phrase tables for time-aware emotions and click easter eggs.
Phrases may contain a {context} placeholder, filled with the time period or
holiday name.
"""

# name, first hour, last hour (inclusive), emotions
TIME_PERIODS = {
    'morning': {'name': 'morning', 'start': 6, 'end': 11,
                'emotions': ['energetic', 'fresh', 'motivated']},
    'afternoon': {'name': 'afternoon', 'start': 12, 'end': 17,
                  'emotions': ['focused', 'productive', 'active']},
    'evening': {'name': 'evening', 'start': 18, 'end': 22,
                'emotions': ['relaxed', 'cozy', 'calm']},
    'night': {'name': 'night', 'start': 23, 'end': 5,
              'emotions': ['sleepy', 'dreamy', 'quiet']},
}

# keyed by MMDD
SPECIAL_DATES = {
    '0101': {'name': "New Year", 'emotions': ['excited', 'hopeful', 'festive']},
    '0214': {'name': "Valentine's Day", 'emotions': ['romantic', 'sweet', 'loving']},
    '1031': {'name': "Halloween", 'emotions': ['spooky', 'playful', 'mysterious']},
    '1225': {'name': "Christmas", 'emotions': ['joyful', 'festive', 'magical']},
}

EMOTION_TEXTS = {
    'energetic': ["What a lively {context}!", "Full of pep!", "Bursting with energy!"],
    'fresh': ["Smell that {context} air~", "Feeling so fresh", "Light as a feather"],
    'motivated': ["Let's do our best today!", "So motivated", "Ready for anything"],
    'focused': ["Focus mode on", "Working hard", "Concentrating..."],
    'productive': ["Getting so much done", "Feeling accomplished today", "Everything is going smoothly"],
    'active': ["Up and about", "Plenty of energy", "In great shape"],
    'relaxed': ["Time to unwind~", "This feels nice", "A slow, easy {context}"],
    'cozy': ["So cozy in here", "Snug and comfy", "Warm and fuzzy"],
    'calm': ["Calm inside", "Peaceful...", "So tranquil"],
    'sleepy': ["Getting a bit sleepy...", "Want to nap", "Eyelids so heavy"],
    'dreamy': ["Feeling dreamy", "Like I'm dreaming", "All hazy and soft"],
    'quiet': ["A quiet {context}", "So still", "Hushed hours"],
    'excited': ["So excited!", "Heart's racing!", "Extra happy today"],
    'hopeful': ["Happy {context}! Full of hope", "Looking forward to things", "The future looks bright"],
    'festive': ["Happy {context}!", "Time to celebrate", "Party mood"],
    'romantic': ["Love is in the air", "Feeling the love", "Such a sweet {context}"],
    'sweet': ["Sweet as candy", "So heartwarming", "A tender moment"],
    'loving': ["Full of love", "Sending warm hugs", "So much affection"],
    'joyful': ["Pure joy!", "Couldn't be happier", "Merry {context}!"],
    'magical': ["Something magical is happening", "Like a spell was cast", "A wondrous moment"],
    'spooky': ["Spooky vibes...", "A little scary", "Something eerie this {context}"],
    'playful': ["Wanna play!", "Feeling mischievous", "So much fun"],
    'mysterious': ["Shrouded in mystery", "What could it be...", "Full of secrets"],
}

DEFAULT_EMOTION_TEXTS = ["Feeling pretty good"]

EASTER_EGG_MESSAGES = {
    'double_click': "Double click found!",
    'triple_click': "Triple click! Impressive!",
    'rapid_click': "Whoa, your fingers are fast!",
    'long_press': "The secret of the long press~",
}

DEFAULT_EASTER_EGG_MESSAGE = "Special interaction!"

CLICK_MESSAGES = ["Hi!", "Hm?", "That tickles!", "Yes?"]
