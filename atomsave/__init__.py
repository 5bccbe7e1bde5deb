"""
# ATOM RPG saved games.

A saved game, once decompressed, is a container of files (player.dat,
city_1.dat, ...) each one stored as a named record with its length
in front of it.

The main operations available are

 1. unpack: parse the buffer building the list of records and the index
    by name (core.Container)

 2. get: read a record as raw bytes, as text or as a JSON document

 3. replace: substitute the payload of a record, obtaining a brand new
    container (mutator.replace/mutator.update_json)

The text stored in the records passes through a custom UTF-8-like codec
(see codec) while the names of the records are raw UTF-16 code units.

Everything worth reporting to the user but that is not an error is sent
to a Diagnostics instance.
"""
