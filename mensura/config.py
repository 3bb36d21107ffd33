import configdict

config = configdict.CheckedDict()
config.addKey('maxDots', 4, int, range=(0, 8),
              doc='Highest number of dots tried when converting a quarter-length '
                  'to a dotted note value')
config.addKey('maxTupletDenominator', 50, int, range=(2, 1000),
              doc='Largest denominator tried when inferring the ratio of a tuplet '
                  'from a quarter-length')
config.addKey('maxDenominator', 65536, int, range=(64, 2**30),
              doc='Quarter-lengths given as floats are snapped to the nearest fraction '
                  'with a denominator not exceeding this value')
config.addKey('warnInexpressible', True, type=bool,
              doc='Log a warning when a quarter-length can not be expressed as a '
                  'dotted note value with at most one tuplet')

config.load()
