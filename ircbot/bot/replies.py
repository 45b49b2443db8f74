"""Canned reply strings."""

GREETING = "Greetings, {handle}, and welcome to hel...er, I mean, {channel}."
SELF_ANNOUNCEMENT = "Oh, my. You should be so happy. I'm here."
FAREWELL = "Oh, dear. They decided to move onto more promising channels."

YES = "Yes?"
NOT_UNDERSTOOD = "How could I possibly understand that?"
UNRECOGNIZED = "That was not a recognized command. You fool!"

TIME = "The time is now {time} {zone}."
DATE = "Today is {date}."
UPTIME_SECONDS = "I've been here for {seconds} seconds."
UPTIME_MINUTES = "I've been here for {minutes} minutes and {seconds} seconds."
