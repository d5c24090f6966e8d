# -*- coding: utf-8 -*-
"""
Configuration file for propagating a Gaussian in an infinite well under a
uniform field. It contains the system's parameters, as used by the scripts in
this folder.
"""

###########################
#    System parameters    #
###########################
L = 10.0        # Well length
f = 2.0         # Field strength

#######################
#    Initial state    #
#######################
x0 = 8.0
sigma = 0.5

#########################
#      Resolution       #
#########################
M = 400         # Spatial intervals
K = 200         # Timesteps

params = dict(L=L, M=M, K=K, x0=x0, f=f, sigma=sigma)
