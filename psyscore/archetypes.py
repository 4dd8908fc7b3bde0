"""
PsyScore — Archetype catalog.

Descriptive content for every archetype the classifier can return.  Keys are
stable identifiers; dominant-trait variants share a display name with the
corresponding combination archetype but carry their own description and
population share.
"""

from __future__ import annotations

from psyscore.schemas.results import Archetype


def _archetype(key: str, **fields) -> Archetype:
    return Archetype(key=key, **fields)


ARCHETYPES: dict[str, Archetype] = {
    archetype.key: archetype
    for archetype in (
        _archetype(
            "adaptive_generalist",
            name="Adaptive Generalist",
            description=(
                "You demonstrate remarkable psychological flexibility, adapting "
                "your approach to different situations with ease."
            ),
            strengths=[
                "Versatility",
                "Adaptability",
                "Balance",
                "Social flexibility",
                "Emotional stability",
            ],
            ideal_environments=[
                "Cross-functional teams",
                "Project management",
                "Consulting",
                "Leadership roles requiring adaptability",
            ],
            growth_edge=(
                "While balance is a strength, consider developing one or two "
                "traits more deeply to create distinctive expertise."
            ),
            population_share="~12%",
        ),
        _archetype(
            "strategic_innovator",
            name="Strategic Innovator",
            description=(
                "You combine visionary creativity with disciplined execution, "
                "a rare and powerful combination."
            ),
            strengths=[
                "Visionary thinking",
                "Strategic planning",
                "Innovation with execution",
                "Goal achievement",
                "Creative problem-solving",
            ],
            ideal_environments=[
                "Startup leadership",
                "Research & development",
                "Strategic consulting",
                "Product innovation",
                "Entrepreneurship",
            ],
            growth_edge=(
                "Remember to delegate routine tasks and avoid perfectionism that "
                "might slow down your innovative momentum."
            ),
            population_share="< 3%",
        ),
        _archetype(
            "creative_catalyst",
            name="Creative Catalyst",
            description="You energize teams with innovative ideas and contagious enthusiasm.",
            strengths=[
                "Idea generation",
                "Team inspiration",
                "Creative collaboration",
                "Networking",
                "Enthusiasm",
            ],
            ideal_environments=[
                "Creative agencies",
                "Marketing",
                "Entertainment",
                "Team leadership",
                "Innovation workshops",
            ],
            growth_edge=(
                "Balance your enthusiasm with follow-through, and ensure ideas "
                "are implemented, not just generated."
            ),
            population_share="~7%",
        ),
        _archetype(
            "servant_leader",
            name="Servant Leader",
            description=(
                "You lead through service, combining reliability with genuine "
                "care for others."
            ),
            strengths=[
                "Ethical leadership",
                "Team building",
                "Reliability",
                "Empathy",
                "Conflict resolution",
            ],
            ideal_environments=[
                "Non-profit leadership",
                "Human resources",
                "Healthcare management",
                "Education",
                "Community organizations",
            ],
            growth_edge=(
                "Don't forget your own needs while serving others. Set "
                "boundaries to prevent burnout."
            ),
            population_share="~9%",
        ),
        _archetype(
            "analytical_architect",
            name="Analytical Architect",
            description=(
                "You excel at designing and implementing complex systems with "
                "precision and depth."
            ),
            strengths=[
                "Systems thinking",
                "Detail orientation",
                "Deep focus",
                "Quality control",
                "Strategic planning",
            ],
            ideal_environments=[
                "Software architecture",
                "Research",
                "Financial analysis",
                "Engineering",
                "Quality assurance",
            ],
            growth_edge=(
                "Remember to communicate your insights to others and seek input, "
                "even if collaboration doesn't come naturally."
            ),
            population_share="~11%",
        ),
        _archetype(
            "inspirational_connector",
            name="Inspirational Connector",
            description="You build bridges between people and ideas with warmth and enthusiasm.",
            strengths=[
                "Relationship building",
                "Communication",
                "Team harmony",
                "Motivation",
                "Networking",
            ],
            ideal_environments=[
                "Sales",
                "Public relations",
                "Community management",
                "Coaching",
                "Customer success",
            ],
            growth_edge=(
                "Balance your desire to help everyone with strategic focus on "
                "high-impact relationships and goals."
            ),
            population_share="~14%",
        ),
        _archetype(
            "independent_thinker",
            name="Independent Thinker",
            description=(
                "You pursue intellectual exploration and creative insights "
                "through deep, solitary reflection."
            ),
            strengths=[
                "Original thinking",
                "Creative insight",
                "Independence",
                "Intellectual depth",
                "Innovation",
            ],
            ideal_environments=[
                "Research",
                "Writing",
                "Art",
                "Philosophy",
                "Independent consulting",
            ],
            growth_edge=(
                "Share your insights more broadly and consider collaboration to "
                "amplify your ideas' impact."
            ),
            population_share="~8%",
        ),
        _archetype(
            "results_driver",
            name="Results Driver",
            description="You pursue excellence with unwavering focus on outcomes and efficiency.",
            strengths=[
                "Goal achievement",
                "Decision-making",
                "Efficiency",
                "Strategic focus",
                "Performance optimization",
            ],
            ideal_environments=[
                "Executive leadership",
                "Investment banking",
                "Competitive sports",
                "Entrepreneurship",
                "Operations management",
            ],
            growth_edge=(
                "Consider the human element in your drive for results. Building "
                "allies can accelerate achievement."
            ),
            population_share="~6%",
        ),
        _archetype(
            "empathetic_energizer",
            name="Empathetic Energizer",
            description="You bring positive energy and genuine care to every interaction.",
            strengths=[
                "Social energy",
                "Empathy",
                "Team morale",
                "Communication",
                "Positive influence",
            ],
            ideal_environments=[
                "Human resources",
                "Teaching",
                "Customer service",
                "Healthcare",
                "Event planning",
            ],
            growth_edge=(
                "Set boundaries to protect your energy and avoid overextending "
                "yourself in helping others."
            ),
            population_share="~10%",
        ),
        _archetype(
            "reliable_guardian",
            name="Reliable Guardian",
            description=(
                "You provide stability and support through consistent care and "
                "dependability."
            ),
            strengths=[
                "Dependability",
                "Loyalty",
                "Practical support",
                "Consistency",
                "Trustworthiness",
            ],
            ideal_environments=[
                "Healthcare",
                "Education",
                "Public service",
                "Administration",
                "Community support",
            ],
            growth_edge=(
                "Consider embracing some calculated risks and new approaches to "
                "expand your impact."
            ),
            population_share="~13%",
        ),
        _archetype(
            "social_butterfly",
            name="Social Butterfly",
            description="You thrive on social connection and bring energy to every gathering.",
            strengths=[
                "Networking",
                "Social energy",
                "Communication",
                "Enthusiasm",
                "Inclusiveness",
            ],
            ideal_environments=[
                "Sales",
                "Event planning",
                "Public relations",
                "Media",
                "Hospitality",
            ],
            growth_edge="Balance social time with reflection to deepen relationships and insights.",
            population_share="~8%",
        ),
        _archetype(
            "perfectionist",
            name="Perfectionist",
            description=(
                "You pursue excellence with meticulous attention to detail and "
                "high standards."
            ),
            strengths=[
                "Attention to detail",
                "Quality focus",
                "Thoroughness",
                "High standards",
                "Problem detection",
            ],
            ideal_environments=[
                "Quality assurance",
                "Editing",
                "Accounting",
                "Research",
                "Compliance",
            ],
            growth_edge=(
                'Learn when "good enough" truly is good enough to avoid '
                "paralysis and burnout."
            ),
            population_share="~5%",
        ),
        _archetype(
            "creative_explorer",
            name="Creative Explorer",
            description=(
                "You pursue creative expression and novel experiences with "
                "boundless curiosity."
            ),
            strengths=["Creativity", "Innovation", "Curiosity", "Adaptability", "Artistic vision"],
            ideal_environments=["Arts", "Design", "Innovation labs", "Travel", "Creative writing"],
            growth_edge=(
                "Channel your creativity into completed projects rather than "
                "endless exploration."
            ),
            population_share="~6%",
        ),
        _archetype(
            "harmonizer",
            name="Harmonizer",
            description=(
                "You create harmony and understanding through exceptional "
                "empathy and cooperation."
            ),
            strengths=[
                "Empathy",
                "Cooperation",
                "Conflict resolution",
                "Team harmony",
                "Compassion",
            ],
            ideal_environments=[
                "Mediation",
                "Counseling",
                "Team facilitation",
                "Non-profit work",
                "Community organizing",
            ],
            growth_edge=(
                "Practice asserting your own needs and boundaries alongside "
                "caring for others."
            ),
            population_share="~7%",
        ),
        _archetype(
            "contemplative_scholar",
            name="Contemplative Scholar",
            description=(
                "You combine intellectual curiosity with disciplined study in "
                "quiet reflection."
            ),
            strengths=[
                "Deep analysis",
                "Intellectual rigor",
                "Independent research",
                "Systematic thinking",
                "Knowledge synthesis",
            ],
            ideal_environments=[
                "Academia",
                "Research institutions",
                "Writing",
                "Analysis",
                "Library sciences",
            ],
            growth_edge=(
                "Share your knowledge more broadly and engage with communities "
                "that can benefit from your insights."
            ),
            population_share="~4%",
        ),
        _archetype(
            "dynamic_leader",
            name="Dynamic Leader",
            description="You drive teams forward with energy, vision, and decisive action.",
            strengths=[
                "Leadership",
                "Decision-making",
                "Team motivation",
                "Strategic vision",
                "Action orientation",
            ],
            ideal_environments=[
                "Executive roles",
                "Sales leadership",
                "Military",
                "Politics",
                "Competitive business",
            ],
            growth_edge="Balance drive with empathy to build lasting loyalty alongside achievement.",
            population_share="~5%",
        ),
        # Dominant-trait variants
        _archetype(
            "dominant_openness",
            name="Creative Explorer",
            description="Your dominant trait of openness drives creative exploration and innovation.",
            strengths=["Creativity", "Innovation", "Adaptability", "Curiosity", "Vision"],
            ideal_environments=["Creative fields", "Innovation", "Arts", "Research", "Design"],
            growth_edge="Balance exploration with execution to bring your creative visions to life.",
            population_share="~15%",
        ),
        _archetype(
            "dominant_conscientiousness",
            name="Analytical Architect",
            description="Your dominant conscientiousness drives systematic achievement and quality.",
            strengths=["Organization", "Reliability", "Goal achievement", "Quality focus", "Planning"],
            ideal_environments=[
                "Project management",
                "Operations",
                "Finance",
                "Engineering",
                "Administration",
            ],
            growth_edge="Allow for flexibility and spontaneity alongside your structured approach.",
            population_share="~18%",
        ),
        _archetype(
            "dominant_extraversion",
            name="Social Butterfly",
            description="Your dominant extraversion drives social connection and energy.",
            strengths=["Social skills", "Energy", "Communication", "Networking", "Enthusiasm"],
            ideal_environments=[
                "Sales",
                "Public speaking",
                "Entertainment",
                "Teaching",
                "Customer-facing roles",
            ],
            growth_edge="Develop comfort with solitude and deep focus alongside your social nature.",
            population_share="~16%",
        ),
        _archetype(
            "dominant_agreeableness",
            name="Harmonizer",
            description="Your dominant agreeableness drives cooperation and care for others.",
            strengths=["Empathy", "Cooperation", "Support", "Harmony", "Compassion"],
            ideal_environments=["Healthcare", "Social work", "Teaching", "Counseling", "Non-profit"],
            growth_edge="Practice self-advocacy alongside your natural care for others.",
            population_share="~17%",
        ),
        _archetype(
            "unique_individual",
            name="Unique Individual",
            description=(
                "Your personality profile is distinctively yours, defying "
                "conventional categories."
            ),
            strengths=[
                "Uniqueness",
                "Versatility",
                "Unpredictability",
                "Fresh perspective",
                "Authenticity",
            ],
            ideal_environments=[
                "Entrepreneurship",
                "Creative fields",
                "Consulting",
                "Innovation",
                "Anywhere that values unique perspectives",
            ],
            growth_edge=(
                "Embrace your uniqueness while finding ways to communicate your "
                "value to others."
            ),
            population_share="~5%",
        ),
    )
}
