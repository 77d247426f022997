"""Prompt for classifying part photos into catalog categories."""

PART_CATEGORIES = [
    "Hydraulic System",
    "Engine Components",
    "Bearings",
    "Undercarriage",
    "Filters",
    "Electrical",
    "Ground Engaging Tools",
    "Belts & Hoses",
    "Braking & Friction",
    "Hardware",
    "Cooling System",
    "Turbochargers",
    "Air Inlet & Exhaust",
    "Gaskets & Seals",
]

IMAGE_CLASSIFY_PROMPT = """Classify this heavy equipment/machinery part image into ONE category from this list:
1. Hydraulic System (pumps, valves, cylinders, hoses, fittings)
2. Engine Components (pistons, crankshafts, camshafts, cylinder heads, blocks)
3. Bearings (ball bearings, roller bearings, bushings, races)
4. Undercarriage (track links, rollers, idlers, sprockets, shoes)
5. Filters (oil, fuel, air, hydraulic filters)
6. Electrical (alternators, starters, wiring, switches, sensors)
7. Ground Engaging Tools (bucket teeth, cutting edges, blades)
8. Belts & Hoses (drive belts, radiator hoses, hydraulic hoses)
9. Braking & Friction (brake pads, discs, friction plates)
10. Hardware (bolts, nuts, screws, washers, pins, clamps)
11. Cooling System (radiators, water pumps, thermostats, fans)
12. Turbochargers (turbo assemblies, cartridges, housings)
13. Air Inlet & Exhaust (mufflers, exhaust pipes, manifolds)
14. Gaskets & Seals (gaskets, o-rings, seals, seal kits)

Reply ONLY with JSON: {"cat": <number 1-14>, "type": "specific part name"}"""
