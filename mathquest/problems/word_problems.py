"""
Word problems built from scenario records.

A scenario is a small tagged record: its kind, the grades it suits, the
numeric ranges it draws from per grade, and functions that turn the drawn
values into question text, an answer and an explanation. Values are drawn
first and rendered with f-strings, so there is no placeholder text to collide.
"""
import random
from dataclasses import dataclass, field
from typing import Callable, Optional

KINDS = ("multiplication", "division", "subtraction", "decimal", "multi_step")

NAMES = [
    "Maya", "Liam", "Ava", "Noah", "Zoe", "Ethan", "Priya", "Lucas",
    "Sofia", "Omar", "Emma", "Kai", "Leah", "Mateo", "Nia", "Sam",
]

BASE_DIFFICULTY = {
    "multiplication": 2,
    "division": 2,
    "subtraction": 1,
    "decimal": 3,
    "multi_step": 3,
}

SKILL_BY_GRADE = {3: "beginner", 4: "intermediate", 5: "advanced"}

Values = dict


def _money(cents: int) -> str:
    return f"{cents / 100:.2f}"


@dataclass(frozen=True)
class Scenario:
    key: str
    kind: str
    context: str
    # grade -> {value name: (low, high)}; grades missing here are not offered the scenario
    ranges: dict
    render: Callable[[Values], str]
    solve: Callable[[Values], object]
    explain: Callable[[Values], list]
    hint: str
    mistakes: tuple = ()
    # Fills in values that depend on the drawn ones (totals built from parts)
    derive: Callable[[Values], Values] = field(default=lambda v: v)
    # Spacing for drawn values (money is drawn in multiples of 5 cents)
    step: int = 1

    def grades(self) -> tuple:
        return tuple(sorted(self.ranges))

    def draw(self, grade: int) -> Values:
        values = {"name": random.choice(NAMES)}
        for key, (low, high) in self.ranges[grade].items():
            values[key] = random.randrange(low, high + 1, self.step) if self.step > 1 else random.randint(low, high)
        return self.derive(values)


def _with(**computed):
    """derive() helper: add computed values from callables of the drawn ones."""
    def derive(values):
        for key, fn in computed.items():
            values[key] = fn(values)
        return values
    return derive


SCENARIOS = [
    # ---------------------------------------------------------------- multiplication
    Scenario(
        key="crayon_boxes",
        kind="multiplication",
        context="Art supplies in the classroom",
        ranges={
            3: {"boxes": (2, 9), "per_box": (2, 10)},
            4: {"boxes": (3, 12), "per_box": (12, 48)},
            5: {"boxes": (12, 60), "per_box": (24, 120)},
        },
        render=lambda v: (
            f"{v['name']} has {v['boxes']} boxes of crayons. Each box holds {v['per_box']} crayons. "
            f"How many crayons does {v['name']} have in all?"
        ),
        solve=lambda v: v["boxes"] * v["per_box"],
        explain=lambda v: [
            f"There are {v['boxes']} equal groups of {v['per_box']} crayons.",
            f"Equal groups means multiply: {v['boxes']} × {v['per_box']} = {v['boxes'] * v['per_box']}.",
            f"{v['name']} has {v['boxes'] * v['per_box']} crayons.",
        ],
        hint="Equal groups of the same size are a clue to multiply.",
        mistakes=("Adding the two numbers instead of multiplying",),
    ),
    Scenario(
        key="garden_rows",
        kind="multiplication",
        context="Planting a school garden",
        ranges={
            3: {"rows": (2, 10), "per_row": (2, 10)},
            4: {"rows": (4, 15), "per_row": (11, 40)},
            5: {"rows": (15, 45), "per_row": (25, 90)},
        },
        render=lambda v: (
            f"The class garden has {v['rows']} rows with {v['per_row']} tomato plants in each row. "
            "How many tomato plants are in the garden?"
        ),
        solve=lambda v: v["rows"] * v["per_row"],
        explain=lambda v: [
            f"Each of the {v['rows']} rows has {v['per_row']} plants.",
            f"Multiply rows by plants per row: {v['rows']} × {v['per_row']} = {v['rows'] * v['per_row']}.",
        ],
        hint="Think of the garden as an array of rows and columns.",
        mistakes=("Counting only one row",),
    ),
    # ---------------------------------------------------------------- division
    Scenario(
        key="sharing_stickers",
        kind="division",
        context="Sharing fairly with friends",
        ranges={
            3: {"friends": (2, 10), "each": (1, 10)},
            4: {"friends": (3, 12), "each": (10, 60)},
            5: {"friends": (12, 25), "each": (15, 120)},
        },
        derive=_with(total=lambda v: v["friends"] * v["each"]),
        render=lambda v: (
            f"{v['name']} has {v['total']} stickers to share equally among {v['friends']} friends. "
            "How many stickers does each friend get?"
        ),
        solve=lambda v: v["each"],
        explain=lambda v: [
            f"Sharing equally means divide: {v['total']} ÷ {v['friends']}.",
            f"Check with multiplication: {v['friends']} × {v['each']} = {v['total']}.",
            f"Each friend gets {v['each']} stickers.",
        ],
        hint="Sharing equally is a clue to divide.",
        mistakes=("Dividing the smaller number by the larger one",),
    ),
    Scenario(
        key="field_trip_vans",
        kind="division",
        context="Planning a class field trip",
        ranges={
            3: {"seats": (2, 9), "vans": (2, 9)},
            4: {"seats": (6, 12), "vans": (5, 30)},
            5: {"seats": (12, 24), "vans": (20, 80)},
        },
        derive=_with(students=lambda v: v["seats"] * v["vans"]),
        render=lambda v: (
            f"{v['students']} students are going on a field trip. Each van holds {v['seats']} students "
            "and every van is full. How many vans are needed?"
        ),
        solve=lambda v: v["vans"],
        explain=lambda v: [
            f"Split {v['students']} students into groups of {v['seats']}: {v['students']} ÷ {v['seats']}.",
            f"{v['seats']} × {v['vans']} = {v['students']}, so {v['vans']} vans are needed.",
        ],
        hint="How many groups of the van size fit into the number of students?",
        mistakes=("Multiplying the numbers instead of dividing",),
    ),
    # ---------------------------------------------------------------- subtraction
    Scenario(
        key="library_books",
        kind="subtraction",
        context="Borrowing books from the library",
        ranges={
            3: {"lent": (10, 400), "left": (10, 500)},
            4: {"lent": (100, 4000), "left": (100, 5000)},
            5: {"lent": (1000, 40000), "left": (1000, 50000)},
        },
        derive=_with(total=lambda v: v["lent"] + v["left"]),
        render=lambda v: (
            f"The school library had {v['total']} books. Students borrowed {v['lent']} of them. "
            "How many books are still on the shelves?"
        ),
        solve=lambda v: v["left"],
        explain=lambda v: [
            f"Books that were taken away are subtracted: {v['total']} - {v['lent']}.",
            f"{v['total']} - {v['lent']} = {v['left']} books are still on the shelves.",
        ],
        hint="'Still left' is a clue to subtract.",
        mistakes=("Adding the borrowed books to the total",),
    ),
    Scenario(
        key="fundraiser_goal",
        kind="subtraction",
        context="A class fundraiser",
        ranges={
            3: {"raised": (50, 500), "missing": (10, 400)},
            4: {"raised": (500, 5000), "missing": (100, 4000)},
            5: {"raised": (5000, 50000), "missing": (1000, 40000)},
        },
        derive=_with(goal=lambda v: v["raised"] + v["missing"]),
        render=lambda v: (
            f"{v['name']}'s class wants to raise {v['goal']} dollars. So far they have raised "
            f"{v['raised']} dollars. How many more dollars do they need?"
        ),
        solve=lambda v: v["missing"],
        explain=lambda v: [
            f"Find the difference between the goal and the amount raised: {v['goal']} - {v['raised']}.",
            f"{v['goal']} - {v['raised']} = {v['missing']} dollars still needed.",
        ],
        hint="'How many more' asks for the difference.",
        mistakes=("Adding the goal and the amount raised",),
    ),
    # ---------------------------------------------------------------- decimal
    Scenario(
        key="school_store",
        kind="decimal",
        context="Shopping at the school store",
        ranges={
            4: {"notebook": (100, 995), "pen": (50, 495)},
            5: {"notebook": (250, 2495), "pen": (100, 1495)},
        },
        step=5,
        render=lambda v: (
            f"{v['name']} buys a notebook for ${_money(v['notebook'])} and a pen for ${_money(v['pen'])}. "
            "How many dollars are spent in all?"
        ),
        solve=lambda v: _money(v["notebook"] + v["pen"]),
        explain=lambda v: [
            "Line up the decimal points and add cents, then dollars.",
            f"{_money(v['notebook'])} + {_money(v['pen'])} = {_money(v['notebook'] + v['pen'])}.",
            f"The total is ${_money(v['notebook'] + v['pen'])}.",
        ],
        hint="Keep the decimal points lined up when you add money.",
        mistakes=("Misaligning the decimal point", "Forgetting to carry from cents to dollars"),
    ),
    Scenario(
        key="making_change",
        kind="decimal",
        context="Getting change at a shop",
        ranges={
            4: {"price": (105, 995)},
            5: {"price": (505, 1995)},
        },
        step=5,
        # Pays with the next whole five-dollar amount above the price
        derive=_with(bill=lambda v: (v["price"] // 500 + 1) * 500),
        render=lambda v: (
            f"A book costs ${_money(v['price'])}. {v['name']} pays with ${_money(v['bill'])}. "
            "How much change should come back, in dollars?"
        ),
        solve=lambda v: _money(v["bill"] - v["price"]),
        explain=lambda v: [
            "Change is the amount paid minus the price.",
            f"{_money(v['bill'])} - {_money(v['price'])} = {_money(v['bill'] - v['price'])}.",
        ],
        hint="Subtract the price from the amount paid, lining up the decimal points.",
        mistakes=("Subtracting the larger amount from the smaller one",),
    ),
    # ---------------------------------------------------------------- multi-step
    Scenario(
        key="trading_cards",
        kind="multi_step",
        context="Collecting trading cards",
        ranges={
            4: {"packs": (3, 9), "per_pack": (6, 15), "given_pct": (10, 60)},
            5: {"packs": (8, 25), "per_pack": (10, 30), "given_pct": (10, 60)},
        },
        derive=_with(
            bought=lambda v: v["packs"] * v["per_pack"],
            given=lambda v: v["packs"] * v["per_pack"] * v["given_pct"] // 100,
        ),
        render=lambda v: (
            f"{v['name']} buys {v['packs']} packs of trading cards with {v['per_pack']} cards in each pack, "
            f"then gives {v['given']} cards to a friend. How many cards does {v['name']} have left?"
        ),
        solve=lambda v: v["bought"] - v["given"],
        explain=lambda v: [
            f"Step 1: find the cards bought: {v['packs']} × {v['per_pack']} = {v['bought']}.",
            f"Step 2: subtract the cards given away: {v['bought']} - {v['given']} = {v['bought'] - v['given']}.",
        ],
        hint="Solve it in two steps: first how many in all, then how many are left.",
        mistakes=("Stopping after the first step", "Subtracting before multiplying"),
    ),
    Scenario(
        key="bake_sale",
        kind="multi_step",
        context="Running a bake sale",
        ranges={
            4: {"trays": (2, 8), "per_tray": (6, 24), "sold_pct": (20, 80), "extra": (5, 30)},
            5: {"trays": (6, 20), "per_tray": (12, 36), "sold_pct": (20, 80), "extra": (20, 120)},
        },
        derive=_with(
            baked=lambda v: v["trays"] * v["per_tray"],
            sold=lambda v: v["trays"] * v["per_tray"] * v["sold_pct"] // 100,
        ),
        render=lambda v: (
            f"For the bake sale, {v['name']} bakes {v['trays']} trays of {v['per_tray']} muffins and sells "
            f"{v['sold']} of them. Then {v['name']} bakes {v['extra']} more muffins. "
            "How many muffins are there now?"
        ),
        solve=lambda v: v["baked"] - v["sold"] + v["extra"],
        explain=lambda v: [
            f"Step 1: muffins baked: {v['trays']} × {v['per_tray']} = {v['baked']}.",
            f"Step 2: after selling: {v['baked']} - {v['sold']} = {v['baked'] - v['sold']}.",
            f"Step 3: add the new batch: {v['baked'] - v['sold']} + {v['extra']} = "
            f"{v['baked'] - v['sold'] + v['extra']}.",
        ],
        hint="Track the number of muffins after each thing that happens.",
        mistakes=("Forgetting the extra batch", "Adding the sold muffins instead of subtracting"),
    ),
]


def eligible_scenarios(grade: int, kind: Optional[str] = None) -> list:
    return [
        s for s in SCENARIOS
        if grade in s.ranges and (kind is None or s.kind == kind)
    ]


def build(scenario: Scenario, grade: int) -> dict:
    values = scenario.draw(grade)
    steps = scenario.explain(values)
    return {
        "grade": grade,
        "type": "word_problems",
        "question": scenario.render(values),
        "answer": str(scenario.solve(values)),
        "explanation": "\n".join(steps),
        "hint": scenario.hint,
        "options": None,
        "difficulty": BASE_DIFFICULTY[scenario.kind] + (1 if grade == 5 else 0),
        "skill_level": SKILL_BY_GRADE[grade],
        "common_mistakes": list(scenario.mistakes),
        "required_steps": steps,
    }


def pick_scenario(grade: int, kind: Optional[str] = None) -> Scenario:
    choices = eligible_scenarios(grade, kind)
    if not choices:
        raise ValueError(f"No word problem scenario for grade {grade} and kind {kind}")
    return random.choice(choices)


def generate(grade: int, kind: Optional[str] = None) -> dict:
    return build(pick_scenario(grade, kind), grade)
