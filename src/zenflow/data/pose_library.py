"""Built-in pose catalog."""

from ..models.pose import Difficulty, Pose, PoseCategory


def _yoga_image(seed: str) -> str:
    """Placeholder photo URL for a catalog pose."""
    return f"https://loremflickr.com/600/400/yoga,asana,{seed}?random={seed}"


# Read-only, shared by every sequence
POSE_LIBRARY: tuple[Pose, ...] = (
    # Standing
    Pose(
        id="tadasana",
        name="Mountain Pose (Tadasana)",
        category=PoseCategory.STANDING,
        difficulty=Difficulty.BEGINNER,
        intensity=1,
        duration="1 min",
        description="Standing tall with feet together.",
        benefits="Improves posture and balance.",
        breathing_guidance="Deep, steady inhales.",
        image_url=_yoga_image("mountain"),
    ),
    Pose(
        id="vrikshasana",
        name="Tree Pose (Vrikshasana)",
        category=PoseCategory.BALANCE,
        difficulty=Difficulty.BEGINNER,
        intensity=3,
        duration="30s each side",
        description="Balance on one leg, other foot on inner thigh.",
        benefits="Strengthens legs and focus.",
        breathing_guidance="Focus on a single point.",
        image_url=_yoga_image("tree"),
    ),
    Pose(
        id="virabhadrasana1",
        name="Warrior I",
        category=PoseCategory.STANDING,
        difficulty=Difficulty.INTERMEDIATE,
        intensity=6,
        duration="45s",
        description="Deep lunge with arms raised high.",
        benefits="Builds stamina and core strength.",
        breathing_guidance="Inhale as you reach up.",
        image_url=_yoga_image("warrior1"),
    ),
    Pose(
        id="virabhadrasana2",
        name="Warrior II",
        category=PoseCategory.STANDING,
        difficulty=Difficulty.INTERMEDIATE,
        intensity=6,
        duration="45s",
        description="Lunge with arms spread wide.",
        benefits="Opens hips and chest.",
        breathing_guidance="Exhale as you sink deeper.",
        image_url=_yoga_image("warrior2"),
    ),
    Pose(
        id="trikonasana",
        name="Triangle Pose",
        category=PoseCategory.STANDING,
        difficulty=Difficulty.INTERMEDIATE,
        intensity=5,
        duration="1 min",
        description="Extended legs with one hand reaching for the floor.",
        benefits="Stretches spine and legs.",
        breathing_guidance="Breathe into the side body.",
        image_url=_yoga_image("triangle"),
    ),
    # Kneeling
    Pose(
        id="marjaryasana",
        name="Cat-Cow Stretch",
        category=PoseCategory.KNEELING,
        difficulty=Difficulty.BEGINNER,
        intensity=2,
        duration="2 mins",
        description="Flowing between arched and rounded spine.",
        benefits="Warms up the spine.",
        breathing_guidance="Inhale to arch, exhale to round.",
        image_url=_yoga_image("catcow"),
    ),
    Pose(
        id="balasana",
        name="Child's Pose",
        category=PoseCategory.KNEELING,
        difficulty=Difficulty.BEGINNER,
        intensity=1,
        duration="2 mins",
        description="Resting with forehead on mat.",
        benefits="Calms the nervous system.",
        breathing_guidance="Slow, deep belly breaths.",
        image_url=_yoga_image("child"),
    ),
    Pose(
        id="adho_mukha",
        name="Downward Dog",
        category=PoseCategory.INVERSION,
        difficulty=Difficulty.BEGINNER,
        intensity=4,
        duration="1 min",
        description="Inverted V-shape with hands and feet on floor.",
        benefits="Full body stretch.",
        breathing_guidance="Push through the palms on exhale.",
        image_url=_yoga_image("downdog"),
    ),
    # Seated
    Pose(
        id="paschimottanasana",
        name="Seated Forward Fold",
        category=PoseCategory.SEATED,
        difficulty=Difficulty.BEGINNER,
        intensity=3,
        duration="2 mins",
        description="Folding forward over extended legs.",
        benefits="Stretches the hamstrings.",
        breathing_guidance="Exhale as you fold.",
        image_url=_yoga_image("forwardfold"),
    ),
    Pose(
        id="baddha_konasana",
        name="Butterfly Pose",
        category=PoseCategory.SEATED,
        difficulty=Difficulty.BEGINNER,
        intensity=2,
        duration="2 mins",
        description="Feet together, knees dropped to sides.",
        benefits="Opens inner thighs.",
        breathing_guidance='Gently flap the "wings" with breath.',
        image_url=_yoga_image("butterfly"),
    ),
    Pose(
        id="sukhasana",
        name="Easy Pose",
        category=PoseCategory.SEATED,
        difficulty=Difficulty.BEGINNER,
        intensity=0,
        duration="5 mins",
        description="Cross-legged sitting for meditation.",
        benefits="Promotes stillness.",
        breathing_guidance="Natural, unforced breath.",
        image_url=_yoga_image("easy"),
    ),
    # Supine / Prone
    Pose(
        id="bhujangasana",
        name="Cobra Pose",
        category=PoseCategory.PRONE,
        difficulty=Difficulty.BEGINNER,
        intensity=3,
        duration="30s",
        description="Lifting chest off the floor.",
        benefits="Strengthens the back.",
        breathing_guidance="Inhale as you lift.",
        image_url=_yoga_image("cobra"),
    ),
    Pose(
        id="setu_bandha",
        name="Bridge Pose",
        category=PoseCategory.SUPINE,
        difficulty=Difficulty.INTERMEDIATE,
        intensity=4,
        duration="1 min",
        description="Lifting hips with feet flat.",
        benefits="Energizes the body.",
        breathing_guidance="Exhale to lower down.",
        image_url=_yoga_image("bridge"),
    ),
    Pose(
        id="shavasana",
        name="Corpse Pose (Shavasana)",
        category=PoseCategory.SUPINE,
        difficulty=Difficulty.BEGINNER,
        intensity=0,
        duration="5 mins",
        description="Lying flat on the back, total relaxation.",
        benefits="Final integration.",
        breathing_guidance="Let go of all control.",
        image_url=_yoga_image("shavasana"),
    ),
    # Peak poses
    Pose(
        id="sirsasana",
        name="Headstand (Sirsasana)",
        category=PoseCategory.INVERSION,
        difficulty=Difficulty.ADVANCED,
        intensity=9,
        duration="1 min",
        description="Balancing upside down on the forearms and crown of the head.",
        benefits="Builds core strength and shoulder stability.",
        breathing_guidance="Slow, even breaths through the nose.",
        image_url=_yoga_image("headstand"),
    ),
    Pose(
        id="bakasana",
        name="Crow Pose (Bakasana)",
        category=PoseCategory.BALANCE,
        difficulty=Difficulty.ADVANCED,
        intensity=8,
        duration="30s",
        description="Knees resting on the upper arms, feet lifted off the mat.",
        benefits="Strengthens wrists, arms and core.",
        breathing_guidance="Exhale as you shift forward and lift.",
        image_url=_yoga_image("crow"),
    ),
)

CATEGORY_FILTERS: tuple[str, ...] = ("All",) + tuple(c.value for c in PoseCategory)


def get_pose(pose_id: str, library: tuple[Pose, ...] = POSE_LIBRARY) -> Pose | None:
    """Get a catalog pose by id."""
    for pose in library:
        if pose.id == pose_id:
            return pose
    return None


def filter_library(
    query: str = "",
    category: PoseCategory | str = "All",
    library: tuple[Pose, ...] = POSE_LIBRARY,
) -> list[Pose]:
    """Filter the catalog by name search and category.

    Args:
        query: Case-insensitive substring of the pose name
        category: A PoseCategory, its value, or "All"
        library: Poses to filter (defaults to the built-in catalog)

    Returns:
        Matching poses in catalog order
    """
    needle = query.strip().lower()
    wanted = None if category == "All" else PoseCategory(category)

    return [
        pose
        for pose in library
        if needle in pose.name.lower() and (wanted is None or pose.category == wanted)
    ]
