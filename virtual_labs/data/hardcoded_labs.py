from virtual_labs.domain.models import ExerciseConfig, StepConfig, VirtualLab

# ==============================================================================
# ENGINE CONFIGURATIONS
# ==============================================================================

CELL_STAINING_CONFIG = ExerciseConfig(
    steps=[
        StepConfig(id="intro", label="Introduction", description="Learn why cells are stained."),
        StepConfig(id="prepare", label="Prepare", description="Prepare a wet mount slide."),
        StepConfig(id="stain", label="Stain", description="Apply methylene blue or iodine."),
        StepConfig(id="observe", label="Observe", description="Identify cells under the microscope."),
        StepConfig(id="conclude", label="Conclude", description="Answer conclusion questions."),
    ],
    passing_score=70,
)

ENZYME_ACTIVITY_CONFIG = ExerciseConfig(
    steps=[
        StepConfig(id="intro", label="Introduction", description="Understand enzymes and temperature."),
        StepConfig(id="setup", label="Setup", description="Prepare catalase and H₂O₂ solutions."),
        StepConfig(id="experiment", label="Experiment", description="Run trials at each temperature."),
        StepConfig(id="graph", label="Graph", description="Plot your results."),
        StepConfig(id="conclude", label="Conclude", description="Interpret your data."),
    ],
    passing_score=70,
)

OSMOSIS_CONFIG = ExerciseConfig(
    steps=[
        StepConfig(id="intro", label="Introduction", description="Learn about osmosis and diffusion."),
        StepConfig(id="setup", label="Setup", description="Prepare your onion cell slides."),
        StepConfig(id="observe", label="Observe", description="Watch osmosis in action."),
        StepConfig(id="record", label="Record", description="Record your data."),
        StepConfig(id="conclude", label="Conclude", description="Draw conclusions from your data."),
    ],
    passing_score=70,
)

PHOTOSYNTHESIS_CONFIG = ExerciseConfig(
    steps=[
        StepConfig(id="intro", label="Introduction", description="Learn how light affects photosynthesis."),
        StepConfig(id="setup", label="Setup", description="Prepare Elodea and apparatus."),
        StepConfig(id="experiment", label="Experiment", description="Count oxygen bubbles at each light distance."),
        StepConfig(id="graph", label="Graph", description="Plot your results as a line graph."),
        StepConfig(id="conclude", label="Conclude", description="Interpret your results."),
    ],
    passing_score=70,
)

STOICHIOMETRY_CONFIG = ExerciseConfig(
    steps=[
        StepConfig(id="intro", label="Theory", description="Conservation of mass."),
        StepConfig(id="balance", label="Balance", description="Balance equations and earn points."),
        StepConfig(id="moles", label="Moles", description="Mole calculations."),
        StepConfig(id="limiting", label="Limiting", description="Identify limiting reagent."),
        StepConfig(id="conclude", label="Conclude", description="Assessment."),
    ],
    passing_score=70,
)

ACIDS_BASES_CONFIG = ExerciseConfig(
    steps=[
        StepConfig(id="intro", label="Theory", description="pH scale and acids/bases."),
        StepConfig(id="theory", label="pH Scale", description="Explore the pH scale."),
        StepConfig(id="defend", label="Defend!", description="pH Defender, the game."),
        StepConfig(id="indicators", label="Indicators", description="Indicator colours."),
        StepConfig(id="conclude", label="Conclude", description="Assessment."),
    ],
    passing_score=70,
)

MITOSIS_CONFIG = ExerciseConfig(
    steps=[
        StepConfig(id="intro", label="Introduction", description="Learn about the cell cycle and mitosis."),
        StepConfig(id="setup", label="Setup", description="Prepare your onion root tip slide."),
        StepConfig(id="identify", label="Identify", description="Identify each stage of mitosis."),
        StepConfig(id="order", label="Sequence", description="Arrange the stages in the correct order."),
        StepConfig(id="conclude", label="Conclude", description="Answer conclusion questions."),
    ],
    passing_score=70,
    # Stages must be identified before they can be sequenced
    navigation="no_skip",
)

# ==============================================================================
# CATALOG
# ==============================================================================

HARDCODED_LABS = {
    lab.id: lab
    for lab in [
        VirtualLab(
            id="lab-cell-staining",
            title="Cell Staining Lab",
            topic_id="cell_biology",
            description="Identify animal, plant, and bacterial cells using methylene blue and iodine stains.",
            difficulty=2,
            estimated_time=20,
            icon_name="microscope",
            config=CELL_STAINING_CONFIG,
        ),
        VirtualLab(
            id="lab-enzyme-temp",
            title="Enzyme Temperature",
            topic_id="enzymes",
            description="Observe how catalase reaction rates change with temperature.",
            difficulty=3,
            estimated_time=15,
            icon_name="beaker",
            config=ENZYME_ACTIVITY_CONFIG,
        ),
        VirtualLab(
            id="lab-osmosis",
            title="Osmosis & Diffusion",
            topic_id="movement",
            description="Simulate red onion cells in hypertonic and hypotonic solutions.",
            difficulty=3,
            estimated_time=25,
            icon_name="atom",
            config=OSMOSIS_CONFIG,
        ),
        VirtualLab(
            id="lab-photosynthesis",
            title="Photosynthesis Rate",
            topic_id="plant_nutrition",
            description="Measure oxygen production in Elodea plants under different light intensities.",
            difficulty=4,
            estimated_time=30,
            icon_name="scale",
            config=PHOTOSYNTHESIS_CONFIG,
        ),
        VirtualLab(
            id="lab-stoichiometry",
            title="Reaction Balancer",
            topic_id="chemical_reactions",
            description="Balance chemical equations by placing coefficients, then work with moles.",
            difficulty=3,
            estimated_time=25,
            icon_name="scale",
            config=STOICHIOMETRY_CONFIG,
        ),
        VirtualLab(
            id="lab-acids-bases",
            title="Acids & Bases",
            topic_id="acids_bases",
            description="Explore the pH scale and defend a solution against acid and alkali.",
            difficulty=2,
            estimated_time=20,
            icon_name="beaker",
            config=ACIDS_BASES_CONFIG,
        ),
        VirtualLab(
            id="lab-mitosis",
            title="Mitosis Stages",
            topic_id="cell_division",
            description="Identify and order the stages of mitosis in an onion root tip.",
            difficulty=3,
            estimated_time=20,
            icon_name="microscope",
            config=MITOSIS_CONFIG,
        ),
    ]
}
