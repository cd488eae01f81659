"""Describes the recipe finder domain. Centres around the `MealController`.

What is there to it?

- Recipes live in TheMealDB, served behind a public json api.
- Search is by name only, lookup is by id.
- No state worth keeping beyond what is on screen right now.

The controller only talks to the page through the `MealView` protocol, so
both the database and the page can be faked.
"""
