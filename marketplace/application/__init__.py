"""
APPLICATION LAYER - Use cases

Commands change state inside one unit of work; queries read through
repositories. Both receive their collaborators via DI.
"""
