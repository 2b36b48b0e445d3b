# pupil_fatigue/sample_data.py
"""Demo report in the analysis service format (35 sample rows, 51 frames)."""

SAMPLE_REPORT = """37,left_eye,2.300457715988159
38,left_eye,2.3212697505950928
39,left_eye,2.3268024921417236
40,left_eye,2.325519323348999
41,left_eye,2.3016486167907715
42,left_eye,2.2915494441986084
43,left_eye,2.307129144668579
44,left_eye,2.3017423152923584
45,left_eye,2.306887149810791
46,left_eye,2.287179708480835
47,left_eye,2.2922284603118896
48,left_eye,2.2548787593841553
49,left_eye,2.260747194290161
50,left_eye,2.299243927001953
0,right_eye,2.2755913734436035
1,right_eye,2.2151496410369873
2,right_eye,2.203460454940796
3,right_eye,2.2932863235473633
4,right_eye,2.2873587608337402
5,right_eye,2.322633981704712
6,right_eye,2.327956199645996
7,right_eye,2.310279607772827
8,right_eye,2.3053176403045654
9,right_eye,2.301894187927246
10,right_eye,2.328364610671997
11,right_eye,2.358999490737915
12,right_eye,2.3684120178222656
13,right_eye,2.3732266426086426
14,right_eye,2.3003456592559814

Processed 255 frames

Left Eye:
  Mean: 2.40 mm
  Std: 0.11 mm
  Min: 2.20 mm
  Max: 2.71 mm

Right Eye:
  Mean: 2.28 mm
  Std: 0.10 mm
  Min: 2.09 mm
  Max: 2.53 mm

--- CSV Data ---
Frame,Eye_Type,Diameter_mm
0,left_eye,2.3495993614196777
1,left_eye,2.3160369396209717
2,left_eye,2.31215500831604
3,left_eye,2.2922122478485107
4,left_eye,2.3858745098114014
5,left_eye,2.389317035675049
"""

SAMPLE_METADATA = {
    "source": "sample_data",
    "note": "Sample cognitive fatigue analysis with mock reaction time data",
}
