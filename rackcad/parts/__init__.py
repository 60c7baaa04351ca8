"""Part generators — each returns a CSG tree in print orientation.

  vent       adaptive ventilation patterns
  keystone   keystone jack cutouts
  faceplate  front panel with mounting slots, cutouts and cages
  cage       device cage attached behind a faceplate window
  ears       L-shaped rack ears
  joiner     panel splitting for small printer beds
"""
