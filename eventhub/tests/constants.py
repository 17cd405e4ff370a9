ORGANIZER = "organizer-1"
OTHER_ORGANIZER = "organizer-2"
