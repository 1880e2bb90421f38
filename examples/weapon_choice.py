import matplotlib.pyplot as plt

from fuzzychoice import WEAPONS, rank, sweep, score_band
from fuzzychoice.weaponLib import distance, ammo, desirability

# Situation of the NPC
target_distance = 30
available_ammo = 60

# Visualize the shared universes and membership functions
distance.view()
ammo.view()
desirability.view()

# Rank the weapons for the current situation
ranking = rank(WEAPONS, target_distance, available_ammo)

for score in ranking:
    tag = ' (RECOMMENDED)' if score.label == ranking.recommended else ''
    print('%-16s %6.2f  %-6s%s' % (score.label, score.value, score_band(score.value), tag))
    print('    inputs    : %s' % {k: {t: round(v, 3) for t, v in d.items()} for k, d in score.inputs.items()})
    print('    strengths : %s' % {k: round(v, 3) for k, v in score.strengths.items()})

# Aggregated output of the recommended weapon with its crisp value
ranking[0].view()

# Performance curves along each input, the other one held at its current value
fig, (ax0, ax1) = plt.subplots(1, 2, figsize=(10, 3))

for candidate in WEAPONS:
    curve = sweep(candidate, 'distance', available_ammo)
    ax0.plot(curve[:, 0], curve[:, 1], label=candidate.name)

    curve = sweep(candidate, 'ammo', target_distance)
    ax1.plot(curve[:, 0], curve[:, 1], label=candidate.name)

ax0.axvline(target_distance, color='k', linestyle='--')
ax0.set_xlabel('distance (ammo at %i)' % available_ammo)
ax0.set_ylabel('desirability')
ax1.axvline(available_ammo, color='k', linestyle='--')
ax1.set_xlabel('ammo (distance at %i)' % target_distance)
ax1.legend()

ax0.set_ylim(0, 100)
ax1.set_ylim(0, 100)

plt.tight_layout()
plt.show()
