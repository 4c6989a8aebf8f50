from virtual_labs.domain.models import EquationChallenge, Molecule, Term

# ==============================================================================
# MOLECULES
# ==============================================================================

H2 = Molecule(display_id="H₂", unit_counts={"H": 2})
O2 = Molecule(display_id="O₂", unit_counts={"O": 2})
H2O = Molecule(display_id="H₂O", unit_counts={"H": 2, "O": 1})
CH4 = Molecule(display_id="CH₄", unit_counts={"C": 1, "H": 4})
CO2 = Molecule(display_id="CO₂", unit_counts={"C": 1, "O": 2})
FE = Molecule(display_id="Fe", unit_counts={"Fe": 1})
FE2O3 = Molecule(display_id="Fe₂O₃", unit_counts={"Fe": 2, "O": 3})
AL = Molecule(display_id="Al", unit_counts={"Al": 1})
AL2O3 = Molecule(display_id="Al₂O₃", unit_counts={"Al": 2, "O": 3})
HCL = Molecule(display_id="HCl", unit_counts={"H": 1, "Cl": 1})
NAOH = Molecule(display_id="NaOH", unit_counts={"Na": 1, "O": 1, "H": 1})
NACL = Molecule(display_id="NaCl", unit_counts={"Na": 1, "Cl": 1})

# ==============================================================================
# CHALLENGES (coefficients are the balanced answer)
# ==============================================================================

EQUATION_CHALLENGES = [
    EquationChallenge(
        id="h2_o2",
        name="Synthesis of Water",
        description="Hydrogen + Oxygen → Water",
        reactants=[Term(H2, 2), Term(O2, 1)],
        products=[Term(H2O, 2)],
        points=150,
        difficulty=1,
        hint="You need 4 H atoms on each side. Try 2H₂ + O₂ → 2H₂O.",
    ),
    EquationChallenge(
        id="combustion_methane",
        name="Combustion of Methane",
        description="Methane + Oxygen → Carbon dioxide + Water",
        reactants=[Term(CH4, 1), Term(O2, 2)],
        products=[Term(CO2, 1), Term(H2O, 2)],
        points=250,
        difficulty=2,
        hint="Balance C first (1), then H (4 → 2H₂O), then count O on the right (4) → need 2O₂.",
    ),
    EquationChallenge(
        id="iron_oxide",
        name="Formation of Iron Oxide",
        description="Iron + Oxygen → Iron(III) oxide",
        reactants=[Term(FE, 4), Term(O2, 3)],
        products=[Term(FE2O3, 2)],
        points=350,
        difficulty=3,
        hint="Need even Fe: 4Fe. Product has 3 O per molecule. 2Fe₂O₃ = 6 O → 3O₂.",
    ),
    EquationChallenge(
        id="aluminium_oxygen",
        name="Combustion of Aluminium",
        description="Aluminium + Oxygen → Aluminium oxide",
        reactants=[Term(AL, 4), Term(O2, 3)],
        products=[Term(AL2O3, 2)],
        points=350,
        difficulty=3,
        hint="Al₂O₃ needs 2 Al per molecule. 2×Al₂O₃ = 4Al, 6O → 3O₂.",
    ),
    EquationChallenge(
        id="hcl_naoh",
        name="Neutralisation",
        description="Hydrochloric acid + Sodium hydroxide → Salt + Water",
        reactants=[Term(HCL, 1), Term(NAOH, 1)],
        products=[Term(NACL, 1), Term(H2O, 1)],
        points=200,
        difficulty=2,
        hint="All coefficients are 1! A classic 1:1 neutralisation reaction.",
    ),
]

CHALLENGES_BY_ID = {challenge.id: challenge for challenge in EQUATION_CHALLENGES}
