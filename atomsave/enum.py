from enum import Flag


class Compliant(Flag):
    '''It indicates how strictly the data must respect the declared lengths'''
    NONE   = 0
    LENGTH = 1 << 0
