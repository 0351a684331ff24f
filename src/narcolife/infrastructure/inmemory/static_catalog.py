from __future__ import annotations

from narcolife.domain.catalog import Catalog
from narcolife.domain.models.city import CityDefinition, Region
from narcolife.domain.models.item import ItemCategory, ItemDefinition
from narcolife.domain.models.mission import (
    ANY_LOCATION,
    FailurePenalty,
    MissionDefinition,
    MissionDifficulty,
    MissionReward,
)
from narcolife.domain.models.npc import NpcDefinition


DEFAULT_STARTING_CITY = "Los Angeles"


def default_cities() -> list[CityDefinition]:
    return [
        CityDefinition(
            id="los-angeles",
            name="Los Angeles",
            region=Region.USA,
            travel_cost=200,
            stamina_cost=15,
            description="City of Angels. Entertainment capital with endless opportunities.",
        ),
        CityDefinition(
            id="miami",
            name="Miami",
            region=Region.USA,
            travel_cost=300,
            stamina_cost=20,
            description="Vice City. Tropical paradise with a dark underbelly.",
        ),
        CityDefinition(
            id="new-york",
            name="New York",
            region=Region.USA,
            travel_cost=250,
            stamina_cost=18,
            description="The Big Apple. Where fortunes are made and lost.",
        ),
        CityDefinition(
            id="tijuana",
            name="Tijuana",
            region=Region.MEXICO,
            travel_cost=150,
            stamina_cost=12,
            description="Border town. Gateway between two worlds.",
        ),
        CityDefinition(
            id="juarez",
            name="Juarez",
            region=Region.MEXICO,
            travel_cost=180,
            stamina_cost=14,
            description="Industrial hub. Manufacturing and smuggling center.",
        ),
        CityDefinition(
            id="puerto-vallarta",
            name="Puerto Vallarta",
            region=Region.MEXICO,
            travel_cost=220,
            stamina_cost=16,
            description="Coastal paradise. Tourist destination with hidden secrets.",
        ),
    ]


def default_items() -> list[ItemDefinition]:
    drug, weapon, equipment, consumable = (
        ItemCategory.DRUG,
        ItemCategory.WEAPON,
        ItemCategory.EQUIPMENT,
        ItemCategory.CONSUMABLE,
    )
    return [
        ItemDefinition("marijuana", "Marijuana", drug, 50, "High-quality cannabis"),
        ItemDefinition("cocaine", "Cocaine", drug, 200, "Pure Colombian powder"),
        ItemDefinition("heroin", "Heroin", drug, 300, "Black tar heroin"),
        ItemDefinition("ecstasy", "Ecstasy", drug, 25, "Party pills"),
        ItemDefinition("meth", "Methamphetamine", drug, 150, "Crystal meth"),
        ItemDefinition("pistol", "Pistol", weapon, 500, "9mm handgun"),
        ItemDefinition("shotgun", "Shotgun", weapon, 800, "Pump-action shotgun"),
        ItemDefinition("rifle", "Assault Rifle", weapon, 1500, "Military-grade rifle"),
        ItemDefinition("knife", "Combat Knife", weapon, 100, "Sharp tactical blade"),
        ItemDefinition("body-armor", "Body Armor", equipment, 1000, "Bulletproof vest"),
        ItemDefinition("lockpicks", "Lockpicks", equipment, 75, "Professional lockpicking set"),
        ItemDefinition("fake-id", "Fake ID", equipment, 250, "High-quality forged documents"),
        ItemDefinition("burner-phone", "Burner Phone", equipment, 50, "Untraceable communication"),
        ItemDefinition("health-kit", "Health Kit", consumable, 100, "Restores 50 health", restores_health=50),
        ItemDefinition("energy-drink", "Energy Drink", consumable, 20, "Restores 25 stamina", restores_stamina=25),
        ItemDefinition("steroids", "Steroids", consumable, 200, "Temporary strength boost"),
    ]


def default_npcs() -> list[NpcDefinition]:
    return [
        NpcDefinition(
            id="la-dealer-1",
            name='Miguel "El Jefe"',
            location="Los Angeles",
            inventory=("marijuana", "cocaine", "ecstasy"),
            buy_multiplier=0.7,
            sell_multiplier=1.3,
            role="Drug Dealer",
            description="Veteran dealer with premium products",
        ),
        NpcDefinition(
            id="la-fence-1",
            name="Tony the Fence",
            location="Los Angeles",
            inventory=("pistol", "knife", "lockpicks", "fake-id"),
            buy_multiplier=0.6,
            sell_multiplier=1.4,
            role="Fence",
            description="Buys and sells stolen goods",
        ),
        NpcDefinition(
            id="la-medic-1",
            name="Dr. Rodriguez",
            location="Los Angeles",
            inventory=("health-kit", "steroids", "energy-drink"),
            buy_multiplier=0.8,
            sell_multiplier=1.2,
            role="Street Medic",
            description="No questions asked medical supplies",
        ),
        NpcDefinition(
            id="miami-dealer-1",
            name='Carlos "Scarface"',
            location="Miami",
            inventory=("cocaine", "heroin", "meth"),
            buy_multiplier=0.8,
            sell_multiplier=1.2,
            role="Drug Lord",
            description="High-end dealer with connections",
        ),
        NpcDefinition(
            id="miami-arms-1",
            name="Viktor the Russian",
            location="Miami",
            inventory=("shotgun", "rifle", "body-armor", "pistol"),
            buy_multiplier=0.7,
            sell_multiplier=1.3,
            role="Arms Dealer",
            description="Military surplus and heavy weapons",
        ),
        NpcDefinition(
            id="ny-dealer-1",
            name='Johnny "The Nose"',
            location="New York",
            inventory=("marijuana", "ecstasy", "burner-phone"),
            buy_multiplier=0.75,
            sell_multiplier=1.25,
            role="Street Dealer",
            description="Old-school dealer with street smarts",
        ),
        NpcDefinition(
            id="ny-tech-1",
            name="Hacker Sam",
            location="New York",
            inventory=("fake-id", "burner-phone", "lockpicks"),
            buy_multiplier=0.6,
            sell_multiplier=1.4,
            role="Tech Specialist",
            description="Digital goods and equipment",
        ),
        NpcDefinition(
            id="tj-dealer-1",
            name='Eduardo "El Lobo"',
            location="Tijuana",
            inventory=("marijuana", "cocaine", "heroin", "meth"),
            buy_multiplier=0.5,
            sell_multiplier=1.5,
            role="Cartel Dealer",
            description="Connected to major cartels",
        ),
        NpcDefinition(
            id="tj-smuggler-1",
            name="Rosa the Smuggler",
            location="Tijuana",
            inventory=("fake-id", "body-armor", "knife"),
            buy_multiplier=0.7,
            sell_multiplier=1.3,
            role="Smuggler",
            description="Moves goods across borders",
        ),
        NpcDefinition(
            id="jz-dealer-1",
            name='Pablo "El Martillo"',
            location="Juarez",
            inventory=("pistol", "shotgun", "knife", "steroids"),
            buy_multiplier=0.8,
            sell_multiplier=1.2,
            role="Enforcer",
            description="Muscle for hire and weapons dealer",
        ),
        NpcDefinition(
            id="pv-dealer-1",
            name='Isabella "La Reina"',
            location="Puerto Vallarta",
            inventory=("marijuana", "ecstasy", "cocaine", "energy-drink"),
            buy_multiplier=0.9,
            sell_multiplier=1.1,
            role="Resort Dealer",
            description="Supplies the tourist trade",
        ),
    ]


def _requirements(strength: int, intelligence: int, endurance: int, shooting: int) -> dict[str, int]:
    return {
        "strength": strength,
        "intelligence": intelligence,
        "endurance": endurance,
        "shooting": shooting,
    }


def default_missions() -> list[MissionDefinition]:
    easy, medium, hard = MissionDifficulty.EASY, MissionDifficulty.MEDIUM, MissionDifficulty.HARD
    return [
        MissionDefinition(
            id="delivery-1",
            title="Package Delivery",
            location=ANY_LOCATION,
            requirements=_requirements(1, 1, 2, 1),
            reward=MissionReward(cash=500, xp=50),
            failure_penalty=FailurePenalty(health=-10, cash=-100),
            success_rate=0.8,
            difficulty=easy,
            description="Deliver a mysterious package across town. No questions asked.",
        ),
        MissionDefinition(
            id="intimidation-1",
            title="Debt Collection",
            location=ANY_LOCATION,
            requirements=_requirements(3, 1, 1, 1),
            reward=MissionReward(cash=750, xp=75),
            failure_penalty=FailurePenalty(health=-15, stamina=-20),
            success_rate=0.7,
            difficulty=easy,
            description="Convince a debtor to pay up. Use whatever methods necessary.",
        ),
        MissionDefinition(
            id="smuggling-1",
            title="Border Run",
            location="Tijuana",
            requirements=_requirements(2, 4, 3, 2),
            reward=MissionReward(cash=1200, xp=120),
            failure_penalty=FailurePenalty(health=-25, cash=-300),
            success_rate=0.6,
            difficulty=medium,
            description="Transport goods across the border without detection.",
        ),
        MissionDefinition(
            id="heist-1",
            title="Jewelry Store Job",
            location="Los Angeles",
            requirements=_requirements(3, 5, 4, 6),
            reward=MissionReward(cash=2500, xp=250),
            failure_penalty=FailurePenalty(health=-40, stamina=-30, cash=-500),
            success_rate=0.4,
            difficulty=hard,
            description="Quick in and out. Grab the diamonds and disappear.",
        ),
        MissionDefinition(
            id="assassination-1",
            title="Eliminate Target",
            location="Miami",
            requirements=_requirements(4, 6, 3, 8),
            reward=MissionReward(cash=3000, xp=300),
            failure_penalty=FailurePenalty(health=-50, stamina=-40, cash=-750),
            success_rate=0.3,
            difficulty=hard,
            description="Take out a rival gang member. Clean and professional.",
        ),
        MissionDefinition(
            id="drug-lab-1",
            title="Lab Protection",
            location="Juarez",
            requirements=_requirements(4, 2, 5, 4),
            reward=MissionReward(cash=1500, xp=150),
            failure_penalty=FailurePenalty(health=-30, stamina=-25),
            success_rate=0.5,
            difficulty=medium,
            description="Guard a drug lab from police raids. Stay alert.",
        ),
        MissionDefinition(
            id="money-laundering-1",
            title="Clean the Books",
            location="New York",
            requirements=_requirements(1, 7, 2, 1),
            reward=MissionReward(cash=1800, xp=180),
            failure_penalty=FailurePenalty(health=-20, cash=-400),
            success_rate=0.6,
            difficulty=medium,
            description="Help launder money through legitimate businesses.",
        ),
        MissionDefinition(
            id="cartel-meeting-1",
            title="Cartel Negotiation",
            location="Puerto Vallarta",
            requirements=_requirements(5, 8, 4, 5),
            reward=MissionReward(cash=4000, xp=400),
            failure_penalty=FailurePenalty(health=-60, stamina=-50, cash=-1000),
            success_rate=0.25,
            difficulty=hard,
            description="Represent your organization in high-stakes negotiations.",
        ),
        MissionDefinition(
            id="street-racing-1",
            title="Underground Race",
            location="Los Angeles",
            requirements=_requirements(2, 3, 4, 1),
            reward=MissionReward(cash=800, xp=80),
            failure_penalty=FailurePenalty(health=-20, stamina=-15),
            success_rate=0.7,
            difficulty=easy,
            description="Win an illegal street race with high stakes.",
        ),
        MissionDefinition(
            id="information-1",
            title="Intel Gathering",
            location=ANY_LOCATION,
            requirements=_requirements(2, 6, 3, 2),
            reward=MissionReward(cash=1000, xp=100),
            failure_penalty=FailurePenalty(health=-25, stamina=-20),
            success_rate=0.6,
            difficulty=medium,
            description="Infiltrate a rival organization and gather intelligence.",
        ),
    ]


def build_default_catalog() -> Catalog:
    return Catalog(
        items=default_items(),
        npcs=default_npcs(),
        missions=default_missions(),
        cities=default_cities(),
    )
