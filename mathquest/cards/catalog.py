"""
Memory-card flashcards: a concept question on the front, the rule or
strategy on the back, grouped by topic.
"""

MEMORY_CARDS = {
    "Addition": [
        ("Carrying in Addition", "When do you need to carry a number in addition?",
         "The Rule", "When the sum of digits in any place value is 10 or greater, carry the tens digit "
                     "to the next place value."),
        ("Place Values", "Why is place value important in addition?",
         "Understanding Place Values", "Place values help us line up numbers correctly. Always add digits in "
                                      "the same place value: ones with ones, tens with tens, and so on."),
        ("Mental Math Tips", "What's an easy way to add numbers mentally?",
         "Strategy", "Break numbers into friendly numbers. For example, 28 + 47 can be solved as "
                     "30 + 47 = 77, then subtract 2 to get 75."),
    ],
    "Subtraction": [
        ("Borrowing", "What do you do when the top digit is smaller than the bottom digit?",
         "The Rule", "Borrow 1 from the next place to the left. It becomes 10 in the current place, "
                     "so 3 - 7 turns into 13 - 7."),
        ("Checking Your Work", "How can you check a subtraction answer?",
         "Add It Back", "Add your answer to the number you subtracted. You should get the number you "
                        "started with."),
    ],
    "Multiplication": [
        ("Basic Multiplication", "What is multiplication really doing?",
         "The Concept", "Multiplication is repeated addition. 5 × 3 means adding 5 three times: "
                        "5 + 5 + 5 = 15."),
        ("Multiplying by 10", "What's the quick way to multiply by 10?",
         "The Rule", "Add a zero to the end of the number. This works because each place value is "
                     "10 times the one to its right."),
        ("Times Tables Tricks", "How can you multiply by 9 easily?",
         "The Pattern", "For 9 × N the first digit is N - 1 and the two digits add up to 9. "
                        "Example: 9 × 7 = 63 (6 is 7 - 1, and 6 + 3 = 9)."),
    ],
    "Division": [
        ("Division Concept", "What does division really mean?",
         "Understanding Division", "Division is sharing equally or making equal groups. 12 ÷ 3 means "
                                   "splitting 12 into 3 equal groups."),
        ("Division Rules", "When is a number divisible by 3?",
         "Divisibility Rule", "If the sum of all digits is divisible by 3, the whole number is divisible "
                              "by 3. Example: 126 (1 + 2 + 6 = 9)."),
    ],
    "Fractions": [
        ("What is a Fraction?", "What do the top and bottom numbers mean?",
         "Parts of a Whole", "The bottom number (denominator) shows how many equal parts make a whole. "
                             "The top number (numerator) shows how many parts we're talking about."),
        ("Equivalent Fractions", "What makes fractions equivalent?",
         "Same Value, Different Forms", "Multiply or divide both top and bottom by the same number. "
                                        "1/2 = 2/4 = 3/6."),
        ("Unlike Denominators", "How do you add 1/3 + 1/4?",
         "Find a Common Denominator", "Use the least common denominator, 12: 1/3 = 4/12 and "
                                      "1/4 = 3/12, so the sum is 7/12."),
    ],
    "Geometry": [
        ("Types of Angles", "What are the different types of angles?",
         "Angle Classifications", "Acute: less than 90°\nRight: exactly 90°\n"
                                  "Obtuse: more than 90° but less than 180°\nStraight: exactly 180°"),
        ("Area vs Perimeter", "What's the difference between area and perimeter?",
         "Understanding Space", "Perimeter: the distance around the shape\n"
                                "Area: the space inside the shape"),
    ],
    "Word Problems": [
        ("Problem Solving Steps", "What steps should you follow to solve word problems?",
         "The Strategy", "1. Read carefully\n2. Identify important information\n3. Choose the operation\n"
                         "4. Solve\n5. Check if the answer makes sense"),
        ("Key Words", "What words help you identify the operation needed?",
         "Operation Clues", "Addition: sum, total, in all\nSubtraction: difference, less, remain\n"
                            "Multiplication: times, product\nDivision: share, each, per"),
    ],
    "Algebra": [
        ("Variables", "What is a variable in algebra?",
         "Understanding Variables", "A variable is a letter or symbol that stands for an unknown number. "
                                    "In x + 5 = 12, x is the variable."),
        ("Solving Equations", "What's the basic rule for solving equations?",
         "Balance Method", "Whatever you do to one side of the equation, do to the other side to keep it "
                           "balanced."),
    ],
}


def _card(front_title, front_content, back_title, back_content) -> dict:
    return {
        "front": {"title": front_title, "content": front_content},
        "back": {"title": back_title, "content": back_content},
    }


def list_categories() -> list[dict]:
    return [
        {"name": name, "cards": [_card(*card) for card in cards]}
        for name, cards in MEMORY_CARDS.items()
    ]


def get_category(name: str):
    """Case-insensitive lookup; None for an unknown category."""
    for category, cards in MEMORY_CARDS.items():
        if category.lower() == name.strip().lower():
            return {"name": category, "cards": [_card(*card) for card in cards]}
    return None
