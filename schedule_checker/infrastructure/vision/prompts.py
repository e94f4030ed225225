"""Instruction text sent to the vision model alongside the schedule image."""
from __future__ import annotations

SCHEDULE_EXTRACTION_PROMPT = """You are an expert at extracting class schedule data from fitness studio schedule images.

Analyze this image of a fitness class schedule and extract ALL class entries.

EXTRACTION RULES:
1. Extract EVERY class entry you can find, even if partially visible.
2. The schedule is organized by days of the week (Monday through Sunday), possibly in side-by-side columns.
3. Each class entry has a time, a class name and a trainer name.
4. Class names include: Barre 57, Mat 57, PowerCycle, FIT, HIIT, Strength Lab, Cardio Barre, Cardio Barre Plus,
   Back Body Blaze, Recovery, Foundations, SWEAT In 30, Amped Up!.
5. Keep "Express" in class names where it appears (e.g. "Mat 57 Express"); "EXP" and "EXPR" mean "Express".
6. Some classes carry a theme such as "SLAY SUNDAY" or "GLUTES GALORE".
7. Fix obvious OCR mistakes: "MATS7" is "Mat 57", "BARRES7" is "Barre 57", "FT" is "FIT",
   "730AM" is "7:30 AM".

Return a JSON object with this EXACT structure:
{
  "classes": [
    {
      "day": "Monday",
      "time": "7:30 AM",
      "className": "Studio Barre 57",
      "trainer": "Anisha Shah",
      "theme": null
    }
  ],
  "rawText": "Raw text visible in the image"
}

Use null for theme when a class has none.
Spell days in full with a capital letter: Monday, Tuesday, Wednesday, Thursday, Friday, Saturday, Sunday.
Format times as "H:MM AM" or "H:MM PM" (e.g. "7:30 AM", "10:00 AM", "5:45 PM").
Prefix class names with "Studio " when it is not already present.

Extract ALL classes visible in the image. Be thorough."""
