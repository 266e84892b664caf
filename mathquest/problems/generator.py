"""
Procedural arithmetic problem generator for grades 3-5.

Every generator returns a plain dict with the Problem columns:
grade, type, question, answer, explanation, hint, options, difficulty,
skill_level, common_mistakes, required_steps.

Generation is randomized on every call and total by construction:
subtraction never goes negative and division always comes out even.
"""
import random
from typing import Callable

from mathquest.problems import word_problems

GRADES = (3, 4, 5)

# Largest operand allowed per grade for addition / subtraction
MAGNITUDE_CEILING = {3: 999, 4: 9999, 5: 99999}

PLACE_NAMES = [
    "ones", "tens", "hundreds", "thousands",
    "ten thousands", "hundred thousands", "millions",
]

CATEGORIES = (
    "addition",
    "subtraction",
    "multiplication",
    "division",
    "fractions",
    "word_problems",
    "multiple_choice",
    "true_false",
)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _check_grade(grade: int) -> None:
    if grade not in GRADES:
        raise ValueError(f"Grade must be between 3 and 5, got {grade}")


def _digits(n: int) -> int:
    return len(str(abs(n)))


def difficulty_from_digits(total_digits: int) -> int:
    """Map the combined digit length of the operands onto a 1-5 scale."""
    if total_digits <= 3:
        return 1
    if total_digits <= 5:
        return 2
    if total_digits <= 7:
        return 3
    if total_digits <= 9:
        return 4
    return 5


def skill_level(largest_operand: int, grade: int) -> str:
    """beginner / intermediate / advanced, by operand size relative to the grade ceiling."""
    ceiling_digits = _digits(MAGNITUDE_CEILING[grade])
    gap = ceiling_digits - _digits(largest_operand)
    if gap >= 2:
        return "beginner"
    if gap == 1:
        return "intermediate"
    return "advanced"


def gcd(a: int, b: int) -> int:
    """Greatest common divisor by the Euclidean algorithm."""
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def lcd(a: int, b: int) -> int:
    """Least common denominator: a * b / gcd(a, b)."""
    return a * b // gcd(a, b)


def _problem(grade, type, question, answer, steps, hint, difficulty, level,
             mistakes, options=None) -> dict:
    return {
        "grade": grade,
        "type": type,
        "question": question,
        "answer": str(answer),
        "explanation": "\n".join(steps),
        "hint": hint,
        "options": options,
        "difficulty": max(1, difficulty),
        "skill_level": level,
        "common_mistakes": mistakes,
        "required_steps": steps,
    }


# ---------------------------------------------------------------------------
# Addition / subtraction (column method)
# ---------------------------------------------------------------------------

def _digit_at(n: int, place: int) -> int:
    return (n // 10 ** place) % 10


def column_addition_steps(a: int, b: int) -> list[str]:
    steps = [f"Line up {a} and {b} by place value and add one column at a time, starting with the ones."]
    carry = 0
    for place in range(max(_digits(a), _digits(b))):
        x, y = _digit_at(a, place), _digit_at(b, place)
        total = x + y + carry
        line = f"{PLACE_NAMES[place].capitalize()}: {x} + {y}"
        if carry:
            line += f" + {carry} (carried)"
        line += f" = {total}"
        if total >= 10:
            line += f". Write {total % 10} and carry 1 to the {PLACE_NAMES[place + 1]}."
        else:
            line += f". Write {total}."
        steps.append(line)
        carry = total // 10
    if carry:
        steps.append("Bring down the carried 1 as the leading digit.")
    steps.append(f"So {a} + {b} = {a + b}.")
    return steps


def column_subtraction_steps(minuend: int, subtrahend: int) -> list[str]:
    steps = [
        f"Line up {minuend} and {subtrahend} by place value and subtract one column at a time, "
        "starting with the ones."
    ]
    lent = False  # this column gave 1 to the column on its right
    for place in range(_digits(minuend)):
        digit = _digit_at(minuend, place)
        bottom = _digit_at(subtrahend, place)
        parts = []
        borrow = False
        if lent and digit == 0:
            # A 0 cannot lend, so it regroups from the next place first and stays 9
            top = 9
            borrow = True
            parts.append(
                f"the 0 borrows 1 from the {PLACE_NAMES[place + 1]} to become 10, "
                f"then lends 1 to the {PLACE_NAMES[place - 1]} and is now 9"
            )
        elif lent:
            top = digit - 1
            parts.append(f"the {digit} lent 1 to the {PLACE_NAMES[place - 1]} and is now {top}")
        else:
            top = digit

        if top < bottom:
            borrow = True
            parts.append(
                f"{top} is smaller than {bottom}, so borrow 1 from the {PLACE_NAMES[place + 1]}: "
                f"{top + 10} - {bottom} = {top + 10 - bottom}"
            )
        else:
            parts.append(f"{top} - {bottom} = {top - bottom}")

        steps.append(f"{PLACE_NAMES[place].capitalize()}: " + "; ".join(parts) + ".")
        lent = borrow
    steps.append(f"So {minuend} - {subtrahend} = {minuend - subtrahend}.")
    return steps


def generate_addition(grade: int) -> dict:
    ceiling = MAGNITUDE_CEILING[grade]
    a = random.randint(10, ceiling)
    b = random.randint(10, ceiling)
    steps = column_addition_steps(a, b)
    return _problem(
        grade, "addition",
        f"What is {a} + {b}?",
        a + b,
        steps,
        "Line up the digits by place value and start adding from the ones column.",
        difficulty_from_digits(_digits(a) + _digits(b)),
        skill_level(max(a, b), grade),
        [
            "Forgetting to carry when a column adds up to 10 or more",
            "Misaligning digits of numbers with different lengths",
        ],
    )


def generate_subtraction(grade: int) -> dict:
    ceiling = MAGNITUDE_CEILING[grade]
    # Draw the answer and the subtrahend first so the minuend can never be too small
    result = random.randint(0, ceiling - 1)
    subtrahend = random.randint(1, ceiling - result)
    minuend = result + subtrahend
    steps = column_subtraction_steps(minuend, subtrahend)
    return _problem(
        grade, "subtraction",
        f"What is {minuend} - {subtrahend}?",
        result,
        steps,
        "Start with the ones column. If the top digit is smaller, borrow from the next place.",
        difficulty_from_digits(_digits(minuend) + _digits(subtrahend)),
        skill_level(minuend, grade),
        [
            "Subtracting the smaller digit from the larger one regardless of position",
            "Forgetting to reduce the digit you borrowed from",
        ],
    )


# ---------------------------------------------------------------------------
# Multiplication / division
# ---------------------------------------------------------------------------

MULTIPLICATION_BANDS = {
    3: ((2, 10), (2, 10)),      # single digit facts
    4: ((10, 99), (2, 9)),      # two digit x one digit
    5: ((100, 999), (10, 99)),  # three digit x two digit
}

MULTIPLICATION_HINTS = {
    3: "Think of equal groups, or skip count by one of the numbers.",
    4: "Split the bigger number into tens and ones, multiply each part by the single digit, then add.",
    5: "Split the two-digit number into tens and ones, multiply the other number by each part, then add.",
}

DIVISION_BANDS = {
    # (divisor range, quotient range)
    3: ((2, 10), (1, 10)),
    4: ((2, 12), (10, 99)),
    5: ((10, 25), (10, 999)),
}


def place_value_parts(n: int) -> list[int]:
    """Split 347 into [300, 40, 7], dropping zero parts."""
    parts = []
    for place in reversed(range(_digits(n))):
        digit = _digit_at(n, place)
        if digit:
            parts.append(digit * 10 ** place)
    return parts or [0]


def multiplication_steps(a: int, b: int) -> list[str]:
    # Decompose whichever factor has more than one place value, preferring the multiplier
    if len(place_value_parts(b)) > 1:
        split, other = b, a
    elif len(place_value_parts(a)) > 1:
        split, other = a, b
    else:
        steps = [f"{a} × {b} means {b} groups of {a}."]
        if b <= 5:
            steps.append(" + ".join([str(a)] * b) + f" = {a * b}.")
        else:
            steps.append(f"Use your {a} and {b} times tables: {a} × {b} = {a * b}.")
        return steps

    parts = place_value_parts(split)
    steps = [f"Break {split} into place values: {split} = {' + '.join(str(p) for p in parts)}."]
    products = []
    for part in parts:
        products.append(other * part)
        steps.append(f"{other} × {part} = {other * part}.")
    steps.append(f"Add the partial products: {' + '.join(str(p) for p in products)} = {a * b}.")
    steps.append(f"So {a} × {b} = {a * b}.")
    return steps


def generate_multiplication(grade: int) -> dict:
    (a_lo, a_hi), (b_lo, b_hi) = MULTIPLICATION_BANDS[grade]
    a = random.randint(a_lo, a_hi)
    b = random.randint(b_lo, b_hi)
    steps = multiplication_steps(a, b)
    return _problem(
        grade, "multiplication",
        f"What is {a} × {b}?",
        a * b,
        steps,
        MULTIPLICATION_HINTS[grade],
        difficulty_from_digits(_digits(a) + _digits(b)) + (1 if grade == 5 else 0),
        skill_level(max(a, b), grade),
        [
            "Forgetting the zero when multiplying by a tens part",
            "Adding the numbers instead of multiplying",
        ],
    )


def generate_division(grade: int) -> dict:
    (d_lo, d_hi), (q_lo, q_hi) = DIVISION_BANDS[grade]
    divisor = random.randint(d_lo, d_hi)
    quotient = random.randint(q_lo, q_hi)
    dividend = divisor * quotient
    steps = [
        "Division is the inverse of multiplication.",
        f"Ask yourself: what number times {divisor} equals {dividend}?",
        f"{divisor} × {quotient} = {dividend}.",
        f"So {dividend} ÷ {divisor} = {quotient}.",
    ]
    return _problem(
        grade, "division",
        f"What is {dividend} ÷ {divisor}?",
        quotient,
        steps,
        f"Think of the multiplication fact: ? × {divisor} = {dividend}.",
        difficulty_from_digits(_digits(dividend) + _digits(divisor)),
        skill_level(dividend, grade),
        [
            "Swapping the dividend and the divisor",
            "Stopping early on multi-digit quotients",
        ],
    )


# ---------------------------------------------------------------------------
# Fractions
# ---------------------------------------------------------------------------

def _same_denominator_addition(grade: int) -> dict:
    denominator = random.randint(2, 12)
    n1 = random.randint(1, denominator - 1)
    n2 = random.randint(1, denominator - 1)
    total = n1 + n2
    steps = [
        f"Both fractions have the same denominator, {denominator}.",
        f"Add the numerators: {n1} + {n2} = {total}.",
        f"Keep the denominator: {n1}/{denominator} + {n2}/{denominator} = {total}/{denominator}.",
    ]
    return _problem(
        grade, "fractions",
        f"What is {n1}/{denominator} + {n2}/{denominator}?",
        f"{total}/{denominator}",
        steps,
        "When the bottom numbers match, only add the top numbers.",
        1,
        "beginner",
        [
            "Adding the denominators too",
            "Changing the denominator when it should stay the same",
        ],
    )


def _mixed_to_improper(grade: int) -> dict:
    whole = random.randint(1, 9)
    denominator = random.randint(2, 10)
    numerator = random.randint(1, denominator - 1)
    improper = whole * denominator + numerator
    steps = [
        f"Multiply the whole number by the denominator: {whole} × {denominator} = {whole * denominator}.",
        f"Add the numerator: {whole * denominator} + {numerator} = {improper}.",
        f"Keep the denominator: {whole} {numerator}/{denominator} = {improper}/{denominator}.",
    ]
    return _problem(
        grade, "fractions",
        f"Write {whole} {numerator}/{denominator} as an improper fraction.",
        f"{improper}/{denominator}",
        steps,
        "Each whole is worth as many parts as the denominator says.",
        2,
        "intermediate",
        [
            "Adding the whole number to the numerator instead of multiplying first",
            "Multiplying the denominator by the numerator",
        ],
    )


def _unlike_denominator_addition(grade: int) -> dict:
    d1 = random.randint(2, 12)
    d2 = random.choice([d for d in range(2, 13) if d != d1])
    n1 = random.randint(1, d1 - 1)
    n2 = random.randint(1, d2 - 1)
    divisor = gcd(d1, d2)
    common = lcd(d1, d2)
    s1 = n1 * (common // d1)
    s2 = n2 * (common // d2)
    total = s1 + s2
    reduce_by = gcd(total, common)
    answer = f"{total // reduce_by}/{common // reduce_by}"
    steps = [
        f"The denominators {d1} and {d2} are different, so find a common denominator.",
        f"Greatest common divisor of {d1} and {d2} is {divisor}.",
        f"Least common denominator = {d1} × {d2} ÷ {divisor} = {common}.",
        f"Rewrite: {n1}/{d1} = {s1}/{common} and {n2}/{d2} = {s2}/{common}.",
        f"Add the numerators: {s1} + {s2} = {total}, giving {total}/{common}.",
    ]
    if reduce_by > 1:
        steps.append(f"Simplify by dividing top and bottom by {reduce_by}: {answer}.")
    return _problem(
        grade, "fractions",
        f"What is {n1}/{d1} + {n2}/{d2}? Give your answer in simplest form.",
        answer,
        steps,
        "Find the least common denominator before adding.",
        3,
        "advanced",
        [
            "Adding numerators and denominators straight across",
            "Forgetting to scale the numerator along with the denominator",
            "Leaving the answer unsimplified",
        ],
    )


def generate_fraction(grade: int) -> dict:
    if grade == 3:
        return _same_denominator_addition(grade)
    if grade == 4:
        return _mixed_to_improper(grade)
    return _unlike_denominator_addition(grade)


# ---------------------------------------------------------------------------
# Multiple choice / true-false
# ---------------------------------------------------------------------------

def near_miss_distractors(correct: int, how_many: int = 3, max_offset: int = 20) -> list[int]:
    """Distinct non-negative values within +-max_offset of the correct answer."""
    candidates = [
        correct + offset
        for offset in range(-max_offset, max_offset + 1)
        if offset != 0 and correct + offset >= 0
    ]
    return random.sample(candidates, how_many)


def generate_multiple_choice(grade: int) -> dict:
    ceiling = MAGNITUDE_CEILING[grade] // 10
    a = random.randint(10, ceiling)
    b = random.randint(10, ceiling)
    correct = a + b
    options = [str(v) for v in near_miss_distractors(correct) + [correct]]
    random.shuffle(options)
    steps = column_addition_steps(a, b)
    return _problem(
        grade, "multiple_choice",
        f"Which number equals {a} + {b}?",
        correct,
        steps,
        "Estimate first by rounding, then check the choices closest to your estimate.",
        difficulty_from_digits(_digits(a) + _digits(b)),
        skill_level(max(a, b), grade),
        ["Picking a choice that is off by one from a missed carry"],
        options=options,
    )


def generate_true_false(grade: int) -> dict:
    ceiling = MAGNITUDE_CEILING[grade] // 10
    a = random.randint(10, ceiling)
    b = random.randint(10, ceiling)
    is_true = random.choice([True, False])

    if random.choice(["sum", "comparison"]) == "sum":
        correct = a + b
        shown = correct if is_true else correct + random.choice([-1, 1]) * random.randint(1, 10)
        question = f"True or False: {a} + {b} = {shown}"
        steps = column_addition_steps(a, b)
        steps.append(f"{correct} {'equals' if shown == correct else 'does not equal'} {shown}, "
                     f"so the statement is {'True' if is_true else 'False'}.")
        hint = "Work out the sum yourself before deciding."
    else:
        if a == b:
            b += 1
        bigger, smaller = max(a, b), min(a, b)
        # A false statement flips the comparison
        left, right = (bigger, smaller) if is_true else (smaller, bigger)
        question = f"True or False: {left} is greater than {right}"
        steps = [
            "Compare the numbers place by place, starting from the left.",
            f"{bigger} is greater than {smaller}, so the statement is {'True' if is_true else 'False'}.",
        ]
        hint = "The number with more digits is larger; if they tie, compare from the left."

    return _problem(
        grade, "true_false",
        question,
        "True" if is_true else "False",
        steps,
        hint,
        1,
        skill_level(max(a, b), grade),
        ["Answering from a quick glance without checking every digit"],
        options=["True", "False"],
    )


def generate_word_problem(grade: int) -> dict:
    return word_problems.generate(grade)


GENERATORS: dict[str, Callable[[int], dict]] = {
    "addition": generate_addition,
    "subtraction": generate_subtraction,
    "multiplication": generate_multiplication,
    "division": generate_division,
    "fractions": generate_fraction,
    "word_problems": generate_word_problem,
    "multiple_choice": generate_multiple_choice,
    "true_false": generate_true_false,
}


def generate_problem(grade: int, category: str) -> dict:
    _check_grade(grade)
    generator = GENERATORS.get(category)
    if generator is None:
        raise ValueError(f"Unknown problem category: {category}")
    return generator(grade)


def generate_problems(grade: int, category: str, count: int) -> list[dict]:
    return [generate_problem(grade, category) for _ in range(count)]
